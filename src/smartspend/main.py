"""Command-line entry point."""
import sys
import asyncio
import argparse
import subprocess
from pathlib import Path
from typing import List

from .config import Config, ConfigManager
from .llm import StatementAnalyzer, TextStatement, load_statement
from .llm.categories import Category, CATEGORY_COLORS, CATEGORY_ICONS
from .session import SessionController
from .utils import format_currency, get_logger, configure_logging, InputError

logger = get_logger()


def categories_command() -> None:
    """Print the fixed category table."""
    print(f"{'Icon':<6} {'Category':<24} {'Color':<8}")
    print("-" * 40)
    for category in Category:
        print(f"{CATEGORY_ICONS[category]:<6} {category.value:<24} {CATEGORY_COLORS[category]:<8}")


def web_command() -> int:
    """Launch the Streamlit app."""
    app_path = Path(__file__).parent / "ui" / "app.py"
    return subprocess.call([sys.executable, "-m", "streamlit", "run", str(app_path)])


async def analyze_command(config: Config, files: List[Path], text: str = None) -> int:
    """Analyze statements one after another into a single session and print the result."""
    controller = SessionController(StatementAnalyzer(config.gemini_api_key, config.settings))
    settings = config.settings

    statements = []
    if text:
        statements.append(TextStatement(text))
    for path in files:
        try:
            statements.append(load_statement(path))
        except InputError as e:
            print(f"✗ {e}", file=sys.stderr)
            return 1

    failures = 0
    for statement in statements:
        state = await controller.analyze(statement)
        if state.error:
            failures += 1
            print(f"✗ {state.error}", file=sys.stderr)

    _print_report(controller, settings)
    return 1 if failures else 0


def _print_report(controller: SessionController, settings) -> None:
    """Print category breakdown and transaction table."""
    def money(amount):
        return format_currency(amount, settings.currency_symbol, settings.digit_grouping)

    aggregated = controller.aggregate()

    print(f"\nTotal: {money(aggregated.grand_total)} ({aggregated.transaction_count} transactions)")
    print(f"\n{'Category':<26} {'Count':>5} {'Total':>16} {'Share':>7}")
    print("-" * 58)
    for summary in aggregated.summaries:
        print(
            f"{summary.category.value:<26} {summary.count:>5} "
            f"{money(summary.total):>16} {aggregated.share(summary.category) * 100:>6.1f}%"
        )

    if controller.state.transactions:
        print(f"\n{'Date':<11} {'Merchant':<30} {'Category':<22} {'Amount':>14}")
        print("-" * 80)
        for txn in controller.state.transactions:
            print(
                f"{txn.date or '-':<11} {txn.merchant[:30]:<30} "
                f"{txn.category.value:<22} {money(txn.amount):>14}"
            )


def _load_and_validate_config() -> Config:
    """Load and validate configuration, exiting when it is unusable."""
    config_manager = ConfigManager()
    config = config_manager.load_config()

    if not config:
        logger.critical("No Gemini API key found. Set GEMINI_API_KEY.")
        sys.exit(1)

    is_valid, message = config_manager.validate_config(config)
    if not is_valid:
        logger.critical(f"Invalid configuration: {message}")
        sys.exit(1)

    configure_logging(config.settings)
    logger.info("Configuration loaded successfully")
    return config


def main():
    """Main entry point for SmartSpend."""
    parser = argparse.ArgumentParser(description="SmartSpend AI statement analyzer")
    subparsers = parser.add_subparsers(dest="command")

    analyze_parser = subparsers.add_parser("analyze", help="Analyze statement files or text")
    analyze_parser.add_argument("files", nargs="*", type=Path, help="Statement images or text files")
    analyze_parser.add_argument("--text", help="Statement text to analyze")

    subparsers.add_parser("categories", help="List spending categories")
    subparsers.add_parser("web", help="Launch the browser app (default)")

    args = parser.parse_args()

    if args.command == "categories":
        categories_command()
        return

    if args.command == "analyze":
        if not args.files and not args.text:
            analyze_parser.error("provide at least one file or --text")
        config = _load_and_validate_config()
        try:
            sys.exit(asyncio.run(analyze_command(config, args.files, args.text)))
        except KeyboardInterrupt:
            logger.info("Received keyboard interrupt")
            sys.exit(130)

    sys.exit(web_command())


if __name__ == "__main__":
    main()

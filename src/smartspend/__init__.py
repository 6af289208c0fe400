"""SmartSpend: AI-assisted bank statement expense tracker."""

__version__ = "0.1.0"

"""Statement analysis using the native Google AI SDK."""
import re
import json
import asyncio
from typing import Optional

from google import genai
from google.genai import types
from pydantic import ValidationError

from .categories import category_names
from .inputs import ImageStatement, StatementInput, TextStatement
from .models import AnalysisResult
from .schemas import AnalysisResponse
from ..config.settings import AppSettings, get_settings
from ..utils.logger import get_logger
from ..utils.retry import retry_with_backoff
from ..utils.exceptions import AnalysisFailure, InputError, LLMError

logger = get_logger()


class StatementAnalyzer:
    """Extracts and categorizes statement transactions with Gemini."""

    def __init__(self, api_key: str, settings: Optional[AppSettings] = None, client=None):
        """
        Initialize statement analyzer.

        Args:
            api_key: Google AI API key
            settings: Application settings (defaults to the packaged settings)
            client: Pre-built genai client, mainly for tests
        """
        self.settings = settings or get_settings()
        self.client = client or genai.Client(api_key=api_key)
        self.model_name = self.settings.llm_model_name
        self.timeout = self.settings.llm_request_timeout_seconds

        self._generate = retry_with_backoff(
            max_retries=self.settings.llm_max_retries,
            initial_delay=self.settings.llm_initial_delay_seconds,
            backoff_factor=self.settings.llm_backoff_factor
        )(self._generate_once)

        logger.info(f"Statement Analyzer initialized with {self.model_name}")

    async def analyze(self, statement: StatementInput) -> AnalysisResult:
        """
        Analyze one statement with a single service request.

        Args:
            statement: Pasted text or base64 image

        Returns:
            AnalysisResult with transactions in the order the service returned them

        Raises:
            AnalysisFailure: on any service, timeout, input or contract error
        """
        try:
            contents = self._build_contents(statement)
        except InputError as e:
            logger.warning(f"Statement input rejected: {e}")
            raise AnalysisFailure(str(e))

        try:
            response = await asyncio.wait_for(self._generate(contents), timeout=self.timeout)

            if not response.text:
                raise LLMError("Service returned empty response")

            result = self._parse_response(response.text)

        except asyncio.TimeoutError:
            logger.error(f"Statement analysis timed out after {self.timeout}s")
            raise AnalysisFailure("The analysis took too long. Please try again.")
        except Exception as e:
            logger.error(f"Gemini analysis failed: {e}")
            raise AnalysisFailure() from e

        logger.info(
            f"Extracted {len(result.transactions)} transactions "
            f"(reported total {result.total_amount} {result.currency})"
        )
        return result

    async def _generate_once(self, contents):
        return await self.client.aio.models.generate_content(
            model=self.model_name,
            contents=contents,
            config=self._build_config()
        )

    def _build_contents(self, statement: StatementInput):
        """Build request contents for text or image input."""
        region = self.settings.statement_region

        if isinstance(statement, TextStatement):
            return f"Analyze this {region} bank statement text: \n\n{statement.text}"

        if isinstance(statement, ImageStatement):
            raw = statement.validate(
                self.settings.allowed_mime_types,
                self.settings.max_upload_bytes
            )
            return [
                types.Content(
                    role="user",
                    parts=[
                        types.Part.from_text(
                            text=f"Extract transactions from this {region} bank statement image "
                                 f"and categorize them into {self.settings.currency} values."
                        ),
                        types.Part.from_bytes(data=raw, mime_type=statement.mime_type),
                    ]
                )
            ]

        raise InputError(f"Unsupported statement input: {type(statement).__name__}")

    def _build_config(self) -> types.GenerateContentConfig:
        return types.GenerateContentConfig(
            system_instruction=self._build_system_instruction(),
            response_mime_type="application/json",
            response_schema=self._build_response_schema(),
            temperature=self.settings.llm_temperature
        )

    def _build_system_instruction(self) -> str:
        """Build the fixed extraction rules."""
        currency = self.settings.currency
        return f"""You are an expert financial analyst. Your task is to extract all transactions from the provided bank or credit card statement.
Categorize each transaction into one of these buckets: {', '.join(category_names())}.

Rules:
1. Extract the Date, Merchant/Description, and Amount of every line-item transaction.
2. Convert expense amounts to positive numbers.
3. Treat the currency of every amount as {currency}.
4. Ignore credit/payment transactions unless they are refunds (return a refund as a negative amount).
5. Assign exactly one category per transaction based on merchant names (e.g., Uber/Ola -> Travel & Transport, Swiggy/Zomato -> Food & Dining, Amazon/Flipkart -> Clothing & Shopping).
6. Return valid JSON only.
7. "id" should be a unique string for every transaction.
8. "date" should be ISO 8601 (YYYY-MM-DD) when available, otherwise an empty string.
9. "originalDescription" is the statement line as printed.
"""

    @staticmethod
    def _build_response_schema() -> types.Schema:
        """Structural description of the expected JSON payload."""
        transaction = types.Schema(
            type=types.Type.OBJECT,
            properties={
                "id": types.Schema(type=types.Type.STRING),
                "date": types.Schema(
                    type=types.Type.STRING,
                    description="ISO 8601 format date (YYYY-MM-DD) if available"
                ),
                "merchant": types.Schema(type=types.Type.STRING),
                "amount": types.Schema(type=types.Type.NUMBER),
                "category": types.Schema(type=types.Type.STRING, enum=category_names()),
                "originalDescription": types.Schema(type=types.Type.STRING),
            },
            required=["id", "date", "merchant", "amount", "category", "originalDescription"]
        )
        return types.Schema(
            type=types.Type.OBJECT,
            properties={
                "transactions": types.Schema(type=types.Type.ARRAY, items=transaction),
                "totalAmount": types.Schema(type=types.Type.NUMBER),
                "currency": types.Schema(type=types.Type.STRING),
            },
            required=["transactions", "totalAmount", "currency"]
        )

    @staticmethod
    def _repair_json(text: str) -> str:
        """Best-effort cleanup for payloads that are not valid JSON as returned."""
        # Remove common trailing commas before closing brackets/braces
        text = re.sub(r',\s*([\]}])', r'\1', text)

        # If the model wrapped JSON in text, keep the outermost object
        json_match = re.search(r'\{.*\}', text, re.DOTALL)
        if json_match:
            text = json_match.group(0)
        return text

    def _parse_response(self, response_text: str) -> AnalysisResult:
        """Parse LLM JSON response."""
        try:
            # Clean response (remove markdown if present)
            cleaned = response_text.strip()
            if cleaned.startswith("```"):
                lines = cleaned.split("\n")
                cleaned = "\n".join(lines[1:-1]) if len(lines) > 2 else cleaned
                if cleaned.startswith("json"):
                    cleaned = cleaned[4:].strip()

            try:
                data = json.loads(cleaned)
            except json.JSONDecodeError:
                data = json.loads(self._repair_json(cleaned))

            # Validate with Pydantic
            return AnalysisResponse.model_validate(data).to_result()

        except json.JSONDecodeError as e:
            logger.error(f"Failed to parse JSON response: {e}")
            logger.debug(f"Response text: {response_text[:500]}")
            raise LLMError(f"Invalid JSON response from LLM: {e}")
        except ValidationError as e:
            logger.error(f"Response validation failed: {e}")
            raise LLMError(f"LLM response does not match expected schema: {e}")

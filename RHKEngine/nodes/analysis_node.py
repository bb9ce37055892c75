"""
Image analysis node: turns a photo (or a roster) and a category into an
analysis payload.

The node builds the prompts from the category contract, calls the vision
client once, and parses the answer with RobustJSONParser. Transport and
service errors are mapped onto the AnalyzerFailure family so callers can
show a remediation message without knowing the SDK.
"""

from __future__ import annotations

import base64
import binascii
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import openai

from ..ir.schema import REQUIRED_FIELDS, build_response_schema
from ..prompts import SYSTEM_PROMPT_ANALYSIS, build_analysis_prompt
from ..utils.json_parser import JSONParseError, RobustJSONParser
from .base_node import BaseNode

_DATA_URL_PATTERN = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+);base64,(?P<data>.*)$", re.DOTALL)
DEFAULT_IMAGE_MIME = "image/jpeg"


class AnalyzerFailure(RuntimeError):
    """
    The analyzer could not produce a payload.

    Carries `kind` (machine-readable) and `remediation` (Indonesian text shown
    to the teacher). The current report is left untouched.
    """

    kind = "request"
    remediation = "Gagal menganalisis. Pastikan API Key benar dan koneksi internet stabil."

    def __init__(self, message: str, remediation: Optional[str] = None):
        super().__init__(message)
        if remediation is not None:
            self.remediation = remediation

    def to_dict(self) -> Dict[str, str]:
        return {"kind": self.kind, "message": str(self), "remediation": self.remediation}


class QuotaExhaustedError(AnalyzerFailure):
    kind = "quota"
    remediation = "Kuota API habis atau terlalu banyak permintaan. Tunggu beberapa saat lalu coba lagi."


class UnauthorizedError(AnalyzerFailure):
    kind = "unauthorized"
    remediation = "API Key tidak valid atau tidak memiliki akses. Periksa kembali API Key Anda."


class ServiceOverloadedError(AnalyzerFailure):
    kind = "overloaded"
    remediation = "Layanan AI sedang sibuk. Silakan coba lagi dalam beberapa menit."


class AnalyzerRequestError(AnalyzerFailure):
    kind = "request"


def normalize_image_data_url(image: str) -> str:
    """Return `image` as a base64 data URL; bare base64 is assumed to be JPEG."""
    image = image.strip()
    if _DATA_URL_PATTERN.match(image):
        return image
    return f"data:{DEFAULT_IMAGE_MIME};base64,{image}"


def image_byte_size(image: str) -> int:
    """Decoded size of a data URL or bare base64 image."""
    match = _DATA_URL_PATTERN.match(image.strip())
    payload = match.group("data") if match else image.strip()
    try:
        return len(base64.b64decode(payload, validate=False))
    except (binascii.Error, ValueError):
        raise ValueError("image is not valid base64 data") from None


@dataclass
class AnalysisRequest:
    category: Any
    image: Optional[str] = None
    note: Optional[str] = None
    roster_names: List[str] = field(default_factory=list)
    class_name: Optional[str] = None


class ImageAnalysisNode(BaseNode):
    """
    Vision analysis node.

    Usage:
        payload = ImageAnalysisNode(llm_client).run(AnalysisRequest(category, image=data_url))
    """

    def __init__(self, llm_client, parser: Optional[RobustJSONParser] = None):
        super().__init__(llm_client, "ImageAnalysisNode")
        self.parser = parser or RobustJSONParser()

    def run(self, input_data: AnalysisRequest, **kwargs) -> Dict[str, Any]:
        """
        Analyze one request.

        Args:
            input_data: category, image and hints.
            **kwargs: sampling parameters passed to the client.

        Returns:
            dict: raw analysis payload (wire format).

        Raises:
            AnalyzerFailure: any service, transport or parse failure.
            ValueError: the request fails validate_input.
        """
        if not self.validate_input(input_data):
            raise ValueError("analysis request needs a category, a string image and roster names for roster categories")
        category = input_data.category
        image = normalize_image_data_url(input_data.image) if input_data.image else None
        user_prompt = build_analysis_prompt(
            category,
            note=input_data.note,
            roster_names=input_data.roster_names,
            class_name=input_data.class_name,
        )
        self.log_info(f"analyzing category={category.id}, image={'yes' if image else 'no'}")

        try:
            raw = self.llm_client.invoke_vision(
                SYSTEM_PROMPT_ANALYSIS,
                user_prompt,
                image=image,
                response_schema=build_response_schema(category),
                **kwargs,
            )
        except openai.APIError as exc:
            failure = self._map_api_error(exc)
            self.log_error(f"analyzer call failed ({failure.kind}): {exc}")
            raise failure from exc

        if not raw:
            self.log_error("analyzer returned an empty response")
            raise AnalyzerRequestError("No response from analyzer")

        try:
            payload = self.parser.parse(raw, context_name="analysis", expected_keys=REQUIRED_FIELDS)
        except JSONParseError as exc:
            self.log_error(f"analyzer response is not valid JSON: {exc}")
            raise AnalyzerRequestError(str(exc)) from exc

        return self.process_output(payload, category)

    def validate_input(self, input_data: AnalysisRequest) -> bool:
        category = getattr(input_data, "category", None)
        if category is None:
            return False
        if input_data.image is not None and not isinstance(input_data.image, str):
            return False
        if category.is_roster:
            return bool(input_data.roster_names)
        return True

    def process_output(self, output: Dict[str, Any], category=None) -> Dict[str, Any]:
        chosen = output.get("chosenTitle")
        if category is not None and chosen not in category.candidate_titles:
            self.log_warning(f"chosen title is not in the candidate list: {chosen!r}")
        return output

    @staticmethod
    def _map_api_error(exc: openai.APIError) -> AnalyzerFailure:
        if isinstance(exc, openai.RateLimitError):
            return QuotaExhaustedError(str(exc))
        if isinstance(exc, (openai.AuthenticationError, openai.PermissionDeniedError)):
            return UnauthorizedError(str(exc))
        if isinstance(exc, openai.InternalServerError):
            return ServiceOverloadedError(str(exc))
        return AnalyzerRequestError(str(exc))


__all__ = [
    "AnalyzerFailure",
    "QuotaExhaustedError",
    "UnauthorizedError",
    "ServiceOverloadedError",
    "AnalyzerRequestError",
    "AnalysisRequest",
    "ImageAnalysisNode",
    "normalize_image_data_url",
    "image_byte_size",
]

"""
RHK Report Agent.

Ties the flow together: input checks, image analysis, the per-report random
draws (cover border, signing month), composition and the session state.
Core responsibilities:
1. refuse incomplete input before any network call;
2. run one analyzer request and map its failures without touching the
   current report;
3. compose, store and optionally render/save the result.
"""

import random
import re
from datetime import date
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Optional, Union

from loguru import logger

from .core import CategoryRegistry, ReportComposer, ReportDocument, TeacherProfile, category_registry
from .llms import ConfigurationError, LLMClient
from .nodes import AnalysisRequest, AnalyzerFailure, ImageAnalysisNode, image_byte_size, normalize_image_data_url
from .renderers import HTMLRenderer, pick_border_index
from .state import ReportState
from .utils.config import Settings, settings
from .utils.dates import default_period, pick_report_date

_ROSTER_NUMBERING = re.compile(r"^\s*\d+\s*[.)-]?\s+")


class InputIncomplete(ValueError):
    """A required input is missing or unusable; `field` names which one."""

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field


def parse_roster_names(text: Optional[Union[str, Iterable[str]]]) -> List[str]:
    """Split a newline-delimited roster into names, dropping blanks and leading numbering."""
    if not text:
        return []
    lines = text.splitlines() if isinstance(text, str) else list(text)
    names = []
    for line in lines:
        name = _ROSTER_NUMBERING.sub("", str(line)).strip()
        if name:
            names.append(name)
    return names


class ReportAgent:
    """
    Report agent for one session.

    Args:
        config: settings; the module-level `settings` when omitted.
        llm_client: prebuilt client; built lazily from the config otherwise.
        rng: random source for the border and month draws.
        clock: returns today's date.
    """

    def __init__(
        self,
        config: Optional[Settings] = None,
        llm_client: Optional[LLMClient] = None,
        rng: Optional[random.Random] = None,
        clock: Optional[Callable[[], date]] = None,
        registry: Optional[CategoryRegistry] = None,
    ):
        self.config = config or settings
        self.registry = registry or category_registry
        self.rng = rng or random.Random()
        self.clock = clock or date.today
        self._llm_client = llm_client
        self.composer = ReportComposer(registry=self.registry, logo_url=self.config.REPORT_LOGO_URL)
        self.renderer = HTMLRenderer()
        self.state = ReportState()
        logger.info("RHK Report Agent initialized")

    # ====== Collaborators ======

    def _initialize_llm(self) -> LLMClient:
        api_key = self.config.resolve_api_key()
        if not api_key:
            raise ConfigurationError(
                "API Key belum dikonfigurasi. Set GEMINI_API_KEY (atau API_KEY) di environment atau file .env."
            )
        client = LLMClient(
            api_key=api_key,
            model_name=self.config.RHK_ENGINE_MODEL_NAME,
            base_url=self.config.RHK_ENGINE_BASE_URL,
            timeout=self.config.RHK_ENGINE_REQUEST_TIMEOUT,
            max_retries=self.config.RHK_ENGINE_MAX_RETRIES,
        )
        logger.info(f"using analyzer: {client.get_model_info()}")
        return client

    @property
    def llm_client(self) -> LLMClient:
        if self._llm_client is None:
            self._llm_client = self._initialize_llm()
        return self._llm_client

    # ====== Main flow ======

    def generate_report(
        self,
        profile: Union[TeacherProfile, Dict[str, Any]],
        category_id: str,
        image: Optional[str] = None,
        note: Optional[str] = None,
        roster: Optional[Union[str, Iterable[str]]] = None,
        class_name: Optional[str] = None,
        period: Optional[str] = None,
    ) -> ReportDocument:
        """
        Analyze the input and compose a report.

        Args:
            profile: TeacherProfile or its wire dict.
            category_id: registry id.
            image: evidence photo (data URL or base64); required for narrative categories.
            note: free-text hint for the analyzer.
            roster: newline-delimited student names; required for the roster category.
            class_name: class label for the roster page.
            period: reporting period; current semester when omitted.

        Returns:
            ReportDocument, also stored as the current report.

        Raises:
            CategoryNotFound, ConfigurationError, InputIncomplete, AnalyzerFailure.
        """
        category = self.registry.lookup(category_id)
        client = self.llm_client
        profile = self._check_profile(profile)
        period = self._check_text("period", period)
        note = self._check_text("note", note)
        class_name = self._check_text("class_name", class_name)
        roster_names = self._check_roster(category, roster)
        image = self._check_image(category, image, required=category.requires_image)

        self.state.mark_processing(category_id=category.id, model_name=client.model_name)
        node = ImageAnalysisNode(client)
        request = AnalysisRequest(
            category=category,
            image=image,
            note=note,
            roster_names=roster_names,
            class_name=class_name,
        )
        try:
            payload = node.run(request)
            return self._compose(profile, category.id, payload, image, period)
        except AnalyzerFailure as exc:
            self.state.mark_failed(exc.remediation)
            logger.error(f"analysis failed ({exc.kind}): {exc}")
            raise
        except Exception as exc:
            self.state.mark_failed(str(exc))
            logger.exception(f"report generation failed: {exc}")
            raise

    def compose_from_payload(
        self,
        profile: Union[TeacherProfile, Dict[str, Any]],
        category_id: str,
        payload: Dict[str, Any],
        image: Optional[str] = None,
        period: Optional[str] = None,
    ) -> ReportDocument:
        """Compose from an already available payload; no analyzer call, the image is optional."""
        category = self.registry.lookup(category_id)
        profile = self._check_profile(profile)
        period = self._check_text("period", period)
        image = self._check_image(category, image, required=False)
        if not isinstance(payload, dict):
            raise InputIncomplete("payload", "Data analisis harus berupa objek JSON.")
        return self._compose(profile, category.id, payload, image, period)

    def _compose(
        self,
        profile: TeacherProfile,
        category_id: str,
        payload: Dict[str, Any],
        image: Optional[str],
        period: Optional[str],
    ) -> ReportDocument:
        today = self.clock()
        document = self.composer.compose(
            profile=profile,
            category_id=category_id,
            period=period or default_period(today),
            analysis=payload,
            border_index=pick_border_index(self.rng),
            report_date=pick_report_date(today, self.rng),
            image=image,
        )
        self.state.mark_completed(document)
        return document

    def reset(self):
        """Discard the current report."""
        self.state.reset()
        logger.info("report state reset")

    # ====== Output ======

    def render_html(self, document: Optional[ReportDocument] = None) -> str:
        document = document or self.state.document
        if document is None:
            raise ValueError("no report to render")
        return self.renderer.render(document)

    def save_report(self, document: Optional[ReportDocument] = None, output_dir: Optional[str] = None) -> Path:
        """Write the HTML print view (and a JSON sidecar) to the output directory."""
        document = document or self.state.document
        html_text = self.render_html(document)
        directory = Path(output_dir or self.config.OUTPUT_DIR)
        directory.mkdir(parents=True, exist_ok=True)

        safe_title = "".join(c if c.isalnum() or c in "-_" else "_" for c in document.display_title)
        html_path = directory / f"{safe_title}.html"
        html_path.write_text(html_text, encoding="utf-8")
        self.state.save_to_file(str(directory / f"{safe_title}.json"))
        logger.info(f"report saved to {html_path}")
        return html_path

    # ====== Input checks ======

    def _check_profile(self, profile: Union[TeacherProfile, Dict[str, Any], None]) -> TeacherProfile:
        if profile is None:
            profile = {}
        if not isinstance(profile, (TeacherProfile, dict)):
            raise InputIncomplete("profile", "Profil guru harus berupa objek (nama, NIP, unit kerja, kota).")
        if isinstance(profile, dict):
            profile = TeacherProfile.from_dict(profile)
        if not profile.is_complete():
            raise InputIncomplete("profile", "Lengkapi profil guru (nama, unit kerja, dan kota) terlebih dahulu.")
        return profile

    @staticmethod
    def _check_text(field: str, value: Any) -> Optional[str]:
        """Optional free-text input: None or blank becomes None, non-strings are refused."""
        if value is None:
            return None
        if not isinstance(value, str):
            raise InputIncomplete(field, f"Isian '{field}' harus berupa teks.")
        return value.strip() or None

    def _check_roster(self, category, roster: Any) -> List[str]:
        if roster is not None and not isinstance(roster, (str, list, tuple)):
            raise InputIncomplete("roster", "Daftar nama harus berupa teks (satu nama per baris).")
        names = parse_roster_names(roster)
        if category.is_roster and not names:
            raise InputIncomplete("roster", "Masukkan daftar nama peserta didik (satu nama per baris).")
        return names

    def _check_image(self, category, image: Any, required: bool) -> Optional[str]:
        """Validate the evidence photo and return it as a data URL; roster reports carry none."""
        if image is not None and not isinstance(image, str):
            raise InputIncomplete("image", "Format foto tidak dikenali.")
        if category.is_roster:
            if image:
                logger.debug(f"[{category.id}] roster reports carry no image, ignoring it")
            return None

        image = (image or "").strip()
        if not image:
            if required:
                raise InputIncomplete("image", "Unggah foto kegiatan terlebih dahulu.")
            return None
        try:
            size = image_byte_size(image)
        except ValueError as exc:
            raise InputIncomplete("image", "Format foto tidak dikenali.") from exc
        if size > self.config.MAX_IMAGE_BYTES:
            limit_mb = self.config.MAX_IMAGE_BYTES / (1024 * 1024)
            raise InputIncomplete("image", f"Ukuran foto terlalu besar. Maksimal {limit_mb:g}MB.")
        return normalize_image_data_url(image)


def create_agent(config: Optional[Settings] = None, **kwargs) -> ReportAgent:
    """
    Convenience factory.

    Builds Settings from the environment when no config is given.
    """
    return ReportAgent(config or Settings(), **kwargs)


__all__ = ["ReportAgent", "InputIncomplete", "create_agent", "parse_roster_names"]

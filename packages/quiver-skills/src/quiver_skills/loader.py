"""Skill discovery and loading from the filesystem."""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from quiver_core.config import QuiverConfig
from quiver_core.errors import SkillValidationError
from quiver_core.storage import Storage
from quiver_core.types import TrustState

from quiver_skills.parser import parse_frontmatter
from quiver_skills.scanner import ScanCancelled, scan_source
from quiver_skills.sources import resolve_skill_sources
from quiver_skills.synthesizer import SkillSynthesizer
from quiver_skills.types import (
    FailureReason,
    LoadFailure,
    SkillAction,
    SkillManifest,
)
from quiver_skills.validator import SkillValidator

if TYPE_CHECKING:
    from collections.abc import Sequence

    from quiver_core.types import ExtensionInfo

    from quiver_skills.scanner import CancelSignal
    from quiver_skills.types import SkillFile, SkillSource

logger = logging.getLogger("quiver.skills.loader")


@dataclass(slots=True)
class _SourceResult:
    actions: list[SkillAction] = field(default_factory=list)
    failures: list[LoadFailure] = field(default_factory=list)
    cancelled: bool = False


def _is_cancelled(cancel: CancelSignal | None) -> bool:
    return cancel is not None and cancel.is_set()


class SkillLoader:
    """Discovers SKILL.md packages and adapts them into SkillActions.

    Roots are resolved fresh on every load (user, project, then active
    extensions by name).  Roots and the packages inside them are read
    concurrently; results keep root order.  A package that cannot be
    read, has no frontmatter, or fails validation is logged and skipped
    without affecting any other package.
    """

    def __init__(
        self,
        config: QuiverConfig | None = None,
        project_root: Path | str | None = None,
        extensions: Sequence[ExtensionInfo] = (),
        trust: TrustState | None = None,
        storage: Storage | None = None,
        validator: SkillValidator | None = None,
        synthesizer: SkillSynthesizer | None = None,
    ) -> None:
        self._config = config or QuiverConfig()
        self._project_root = Path(project_root) if project_root else Path.cwd()
        self._extensions = list(extensions)
        self._trust = trust or TrustState.from_config(self._config, self._project_root)
        self._storage = storage or Storage(self._project_root)
        self._validator = validator or SkillValidator()
        self._synthesizer = synthesizer or SkillSynthesizer()

    def sources(self) -> list[SkillSource]:
        """The ranked skill roots for the current configuration."""
        user_dir = self._config.skills.user_dir
        return resolve_skill_sources(
            Path(user_dir).expanduser() if user_dir else Storage.user_skills_dir(),
            self._storage.project_skills_dir(),
            self._extensions,
        )

    async def load(self, cancel: CancelSignal | None = None) -> list[SkillAction]:
        """Load all skills and return their actions in root order."""
        manifest = await self.load_manifest(cancel)
        return manifest.actions

    async def load_manifest(self, cancel: CancelSignal | None = None) -> SkillManifest:
        """Load all skills, also reporting roots scanned and packages skipped.

        If *cancel* fires, roots still in progress contribute nothing and
        the roots already finished are returned.  Cancellation is never
        raised or logged as an error.
        """
        if not self._trust.allows_loading:
            logger.info(
                "Folder %s is not trusted; skipping skill loading",
                self._project_root,
            )
            return SkillManifest()

        if not self._config.skills.enabled:
            logger.info("Skills are disabled in configuration")
            return SkillManifest()

        sources = self.sources()
        results = await asyncio.gather(
            *(self._load_source(source, cancel) for source in sources)
        )

        actions: list[SkillAction] = []
        failures: list[LoadFailure] = []
        cancelled = False
        for result in results:
            actions.extend(result.actions)
            failures.extend(result.failures)
            cancelled = cancelled or result.cancelled

        if cancelled:
            logger.info("Skill loading cancelled; returning %d skill(s)", len(actions))
        else:
            logger.info(
                "Loaded %d skill(s) from %d root(s), %d skipped",
                len(actions),
                len(sources),
                len(failures),
            )
        return SkillManifest(
            actions=actions,
            sources=sources,
            failures=failures,
            cancelled=cancelled,
        )

    async def _load_source(
        self, source: SkillSource, cancel: CancelSignal | None
    ) -> _SourceResult:
        if _is_cancelled(cancel):
            return _SourceResult(cancelled=True)

        try:
            files = await asyncio.to_thread(scan_source, source, cancel)
        except ScanCancelled:
            logger.debug("Scan of %s cancelled", source.path)
            return _SourceResult(cancelled=True)
        except Exception:
            logger.error("Failed to scan skill root %s", source.path, exc_info=True)
            return _SourceResult()

        outcomes = await asyncio.gather(
            *(self._load_file(skill_file, cancel) for skill_file in files)
        )

        # A root is only reported when every one of its packages finished.
        if any(outcome is None for outcome in outcomes) or _is_cancelled(cancel):
            return _SourceResult(cancelled=True)

        result = _SourceResult()
        for outcome in outcomes:
            if isinstance(outcome, SkillAction):
                result.actions.append(outcome)
            else:
                result.failures.append(outcome)
        return result

    async def _load_file(
        self, skill_file: SkillFile, cancel: CancelSignal | None
    ) -> SkillAction | LoadFailure | None:
        """Read and adapt one package; ``None`` means cancelled."""
        if _is_cancelled(cancel):
            return None

        try:
            text = await asyncio.to_thread(skill_file.path.read_text, encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Failed to read skill file %s: %s", skill_file.path, exc)
            return LoadFailure(
                path=skill_file.path,
                reason=FailureReason.READ_ERROR,
                errors=[str(exc)],
            )

        if _is_cancelled(cancel):
            return None

        try:
            return self.adapt(text, skill_file)
        except Exception as exc:
            logger.warning(
                "Failed to load skill from %s", skill_file.path, exc_info=True
            )
            return LoadFailure(
                path=skill_file.path,
                reason=FailureReason.ERROR,
                errors=[f"{type(exc).__name__}: {exc}"],
            )

    def adapt(self, text: str, skill_file: SkillFile) -> SkillAction | LoadFailure:
        """Parse, validate and synthesize one SKILL.md already read into memory."""
        parsed = parse_frontmatter(text)
        if parsed is None:
            logger.warning(
                "Failed to parse frontmatter in %s: no valid frontmatter found",
                skill_file.path,
            )
            return LoadFailure(
                path=skill_file.path,
                reason=FailureReason.NO_FRONTMATTER,
                errors=["No valid frontmatter found"],
            )

        try:
            declaration = self._validator.to_declaration(parsed.fields)
        except SkillValidationError as exc:
            logger.warning(
                "Skipping invalid skill file: %s. Validation errors: %s",
                skill_file.path,
                "; ".join(exc.errors),
            )
            return LoadFailure(
                path=skill_file.path,
                reason=FailureReason.INVALID,
                errors=exc.errors,
            )

        return self._synthesizer.synthesize(declaration, parsed.body, skill_file)

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from quiver_core.config import QuiverConfig

# ── Extension Types ──────────────────────────────────────────────────

@dataclass(frozen=True, slots=True)
class ExtensionInfo:
    """An installed extension as reported by the extension manager."""
    name: str
    id: str
    path: Path
    is_active: bool = True


# ── Trust Types ──────────────────────────────────────────────────────

@dataclass(frozen=True, slots=True)
class TrustState:
    """Folder-trust answer for the current project root.

    ``enforced`` mirrors the folder-trust setting; ``trusted`` whether the
    current folder is trusted.  Content from the project may only be loaded
    when enforcement is off or the folder is trusted.
    """
    enforced: bool = False
    trusted: bool = True

    @property
    def allows_loading(self) -> bool:
        return not self.enforced or self.trusted

    @classmethod
    def from_config(cls, config: QuiverConfig, folder: Path | str) -> TrustState:
        """Evaluate trust for *folder* against ``[security]`` settings.

        A folder is trusted when it is, or lies inside, one of the
        configured ``trusted_folders``.
        """
        if not config.security.folder_trust:
            return cls(enforced=False, trusted=True)

        resolved = Path(folder).expanduser().resolve()
        for entry in config.security.trusted_folders:
            trusted_root = Path(entry).expanduser().resolve()
            if resolved == trusted_root or resolved.is_relative_to(trusted_root):
                return cls(enforced=True, trusted=True)
        return cls(enforced=True, trusted=False)

"""
Configuration for one invocation of the inliner.
"""
from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, model_validator

DEFAULT_THEME = "monokai"
MANIFEST_FILE_NAME = "Cargo.toml"
EMPTY_MANIFEST = "[dependencies]\n"
DEFAULT_SHEBANG = "#!/usr/bin/env -S cargo run -qZscript --release --manifest-path"
SHEBANG_ENV_VAR = "INLINE_MOD_SHEBANG"


class ManifestMode(str, Enum):
    """How the script manifest is obtained (NONE disables zscript output)."""
    NONE = "none"
    EXPLICIT = "explicit"
    AUTO = "auto"
    EMPTY = "empty"


class InlineConfig(BaseModel):
    """Validated settings produced by the argument parser."""
    model_config = ConfigDict(frozen=True)

    input: Path
    output: Optional[Path] = None
    theme: str = DEFAULT_THEME
    color: bool = True
    manifest_mode: ManifestMode = ManifestMode.NONE
    manifest_path: Optional[Path] = None
    search_above_cwd: bool = False
    verbose: bool = False

    @model_validator(mode="after")
    def _check_manifest_path(self):
        if self.manifest_mode is ManifestMode.EXPLICIT and self.manifest_path is None:
            raise ValueError("explicit manifest mode needs a manifest_path")
        if self.manifest_mode is not ManifestMode.EXPLICIT and self.manifest_path is not None:
            raise ValueError("manifest_path is only used in explicit manifest mode")
        return self

    @property
    def zscript(self) -> bool:
        return self.manifest_mode is not ManifestMode.NONE



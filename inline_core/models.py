"""
Data model shared by the inlining pipeline.
"""
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class SourceUnit(BaseModel):
    """One physical source file, read and parsed."""
    path: Path
    canonical_path: Path
    items: List[Any]
    module_path: List[str] = Field(default_factory=list)


class ModuleDeclaration(BaseModel):
    """An unresolved `mod name;` item."""
    model_config = ConfigDict(frozen=True)

    name: str
    path_override: Optional[str] = None
    attributes: List[str] = Field(default_factory=list)
    visibility: Optional[str] = None
    declaring_file: Path
    line: Optional[int] = None
    column: Optional[int] = None

    @property
    def file_stem(self) -> str:
        """Module name as it appears on disk (raw identifiers unescaped)."""
        return self.name[2:] if self.name.startswith("r#") else self.name

    def source_text(self) -> str:
        parts = list(self.attributes)
        if self.visibility:
            parts.append(self.visibility)
        parts.append(f"mod {self.name};")
        return " ".join(parts)


class ResolvedModule(BaseModel):
    """A declaration paired with the single file that defines it."""
    model_config = ConfigDict(frozen=True)

    declaration: ModuleDeclaration
    path: Path
    canonical_path: Path
    directory_owner: bool


class ModuleTree(BaseModel):
    """Merged token trees rooted at the entry file."""
    items: List[Any]
    files: List[Path] = Field(default_factory=list)


class ManifestDescriptor(BaseModel):
    """A located (or explicitly empty) Cargo manifest."""
    model_config = ConfigDict(frozen=True)

    path: Optional[Path] = None
    text: str
    dependencies: Dict[str, Any] = Field(default_factory=dict)
    empty: bool = False


class TargetKind(str, Enum):
    FILE = "file"
    STDOUT = "stdout"


class Outcome(str, Enum):
    """Rows of the output policy table."""
    REJECT_STDOUT_WITHOUT_ZSCRIPT = "reject_stdout_without_zscript"
    SOURCE_PLAIN = "source_plain"
    SCRIPT_PLAIN = "script_plain"
    SCRIPT_COLORED_BODY = "script_colored_body"


class OutputTarget(BaseModel):
    """Where the artifact goes and how it may be rendered, decided once."""
    model_config = ConfigDict(frozen=True)

    kind: TargetKind
    path: Optional[Path] = None
    zscript: bool
    colorize_body: bool
    outcome: Outcome
    theme: Optional[str] = None

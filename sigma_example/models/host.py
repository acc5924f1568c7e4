"""Data models exchanged with the Sigma host API."""

from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class Entry:
    """A file or directory entry selected in the file manager."""

    name: str
    path: str
    is_directory: bool = False
    extension: str | None = None
    size: int | None = None

    @classmethod
    def from_path(cls, path: str | Path) -> "Entry":
        """Build an entry by inspecting a local path.

        Missing paths produce an entry without size information.
        """
        p = Path(path)
        is_directory = p.is_dir()
        size = p.stat().st_size if p.is_file() else None
        extension = None if is_directory else (p.suffix.lstrip(".") or None)
        return cls(
            name=p.name,
            path=str(p),
            is_directory=is_directory,
            extension=extension,
            size=size,
        )


@dataclass
class MenuContext:
    """Context passed to context-menu handlers."""

    selected_entries: list[Entry] = field(default_factory=list)


@dataclass(frozen=True)
class MenuItem:
    """Context-menu item registration.

    ``when`` holds visibility conditions, e.g.
    ``{"selectionType": "single", "entryType": "file"}``.
    """

    id: str
    title: str
    icon: str | None = None
    group: str = "extensions"
    order: int = 0
    when: dict[str, str] | None = None


@dataclass(frozen=True)
class CommandArgument:
    """An argument shown by the host's command palette."""

    name: str
    type: str = "text"
    placeholder: str = ""
    required: bool = False
    data: tuple[tuple[str, str], ...] = ()  # (title, value) pairs for dropdowns


@dataclass(frozen=True)
class CommandSpec:
    """Command registration."""

    id: str
    title: str
    description: str = ""
    arguments: tuple[CommandArgument, ...] = ()


@dataclass
class Notification:
    """A toast notification."""

    title: str
    message: str
    type: str = "info"
    duration: int | None = None


@dataclass
class DialogOptions:
    """Options for a modal dialog.

    ``type`` is one of info, warning, error, confirm or prompt.
    """

    title: str
    message: str
    type: str = "info"
    confirm_text: str = "OK"
    cancel_text: str | None = None
    default_value: str | None = None


@dataclass
class DialogResult:
    """Answer from a dialog."""

    confirmed: bool
    value: str | None = None


@dataclass(frozen=True)
class FileFilter:
    """File picker filter."""

    name: str
    extensions: tuple[str, ...]


@dataclass
class FileDialogOptions:
    """Options for the native file picker."""

    title: str = "Select a file"
    filters: list[FileFilter] = field(default_factory=list)
    multiple: bool = False


@dataclass(frozen=True)
class BuiltinCommand:
    """A command provided by the host itself."""

    id: str
    title: str = ""

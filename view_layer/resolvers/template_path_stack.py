"""Filesystem resolver over a stack of template directories."""

from collections.abc import Iterable
from pathlib import Path, PurePosixPath

from view_layer.exceptions import DomainException
from view_layer.logging_config import get_logger, log_with_context
from view_layer.resolvers.base import LookupFailure

logger = get_logger(__name__)


class TemplatePathStack:
    """Resolve a template name to a file in one of several directories.

    Directories are searched last-added first, so application templates
    pushed after library templates override them.
    """

    def __init__(
        self,
        paths: Iterable[str | Path] | None = None,
        default_suffix: str = "html",
        lfi_protection: bool = True,
    ):
        self._paths: list[Path] = []
        self.default_suffix = default_suffix
        self.lfi_protection = lfi_protection
        self.last_lookup_failure = LookupFailure.NONE
        if paths is not None:
            self.add_paths(paths)

    @property
    def default_suffix(self) -> str:
        return self._default_suffix

    @default_suffix.setter
    def default_suffix(self, suffix: str) -> None:
        self._default_suffix = suffix.strip().lstrip(".")

    @property
    def paths(self) -> list[Path]:
        """Directories in lookup order."""
        return list(reversed(self._paths))

    def add_path(self, path: str | Path) -> "TemplatePathStack":
        self._paths.append(Path(path))
        return self

    def add_paths(self, paths: Iterable[str | Path]) -> "TemplatePathStack":
        for path in paths:
            self.add_path(path)
        return self

    def set_paths(self, paths: Iterable[str | Path]) -> "TemplatePathStack":
        self.clear_paths()
        return self.add_paths(paths)

    def clear_paths(self) -> "TemplatePathStack":
        self._paths = []
        return self

    def resolve(self, name: str) -> str | None:
        """Return the absolute path of the first matching file, or None.

        Raises:
            DomainException: If LFI protection is on and ``name`` walks up a directory
        """
        self.last_lookup_failure = LookupFailure.NONE

        if self.lfi_protection and ".." in PurePosixPath(name.replace("\\", "/")).parts:
            raise DomainException(
                "Requested template contains parent directory traversal", details={"template": name}
            )

        if not self._paths:
            self.last_lookup_failure = LookupFailure.NO_PATHS
            return None

        # Names are always relative to a stack directory
        name = name.lstrip("/\\")
        if not name:
            self.last_lookup_failure = LookupFailure.NOT_FOUND
            return None

        if not PurePosixPath(name).suffix and self.default_suffix:
            name = f"{name}.{self.default_suffix}"

        for path in self.paths:
            candidate = path / name
            if not candidate.is_file():
                continue
            resolved = candidate.resolve()
            if self.lfi_protection and not resolved.is_relative_to(path.resolve()):
                log_with_context(
                    logger,
                    "warning",
                    "Template resolved outside its path stack directory",
                    template=name,
                    path=str(path),
                    event_type="template_path_escape",
                )
                continue
            return str(resolved)

        self.last_lookup_failure = LookupFailure.NOT_FOUND
        log_with_context(
            logger,
            "debug",
            "Template not found in path stack",
            template=name,
            paths=[str(p) for p in self.paths],
            event_type="template_path_miss",
        )
        return None

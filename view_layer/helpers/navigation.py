"""Navigation helper: filters and renders pages the current role may see."""

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any, ClassVar

from markupsafe import Markup

from view_layer.helpers.base import AbstractHelper
from view_layer.protocols import AclProtocol


@dataclass
class NavigationPage:
    """One entry of a navigation container."""

    label: str
    uri: str = "#"
    resource: Any = None
    privilege: Any = None
    visible: bool = True
    pages: list["NavigationPage"] = field(default_factory=list)
    parent: "NavigationPage | None" = field(default=None, repr=False, compare=False)

    def __post_init__(self) -> None:
        for page in self.pages:
            page.parent = self

    def add_page(self, page: "NavigationPage") -> "NavigationPage":
        page.parent = self
        self.pages.append(page)
        return self


class Navigation(AbstractHelper):
    """ACL-aware navigation helper.

    The ACL and role can be set per helper or as class-wide defaults used
    by every helper that has none of its own. Policy evaluation belongs to
    the ACL object; the helper only asks ``acl.is_allowed(role, resource,
    privilege)``.
    """

    _default_acl: ClassVar[AclProtocol | None] = None
    _default_role: ClassVar[Any] = None

    def __init__(self, acl: AclProtocol | None = None, role: Any = None):
        super().__init__()
        self._acl = acl
        self._role = role
        self.use_acl = True

    def __call__(self) -> "Navigation":
        return self

    # ACL

    @classmethod
    def set_default_acl(cls, acl: AclProtocol | None) -> None:
        cls._default_acl = acl

    @classmethod
    def set_default_role(cls, role: Any) -> None:
        cls._default_role = role

    def set_acl(self, acl: AclProtocol | None) -> "Navigation":
        self._acl = acl
        return self

    def get_acl(self) -> AclProtocol | None:
        if self._acl is None and Navigation._default_acl is not None:
            return Navigation._default_acl
        return self._acl

    def has_acl(self) -> bool:
        return self._acl is not None or Navigation._default_acl is not None

    def set_role(self, role: Any) -> "Navigation":
        self._role = role
        return self

    def get_role(self) -> Any:
        if self._role is None and Navigation._default_role is not None:
            return Navigation._default_role
        return self._role

    def has_role(self) -> bool:
        return self._role is not None or Navigation._default_role is not None

    def set_use_acl(self, use_acl: bool = True) -> "Navigation":
        self.use_acl = bool(use_acl)
        return self

    # Acceptance

    def accept(self, page: NavigationPage, recursive: bool = True) -> bool:
        """Whether ``page`` should be shown.

        Args:
            page: Page to check
            recursive: Also require every ancestor to be accepted
        """
        if not page.visible:
            return False
        if self.use_acl and not self._accept_acl(page):
            return False
        if recursive and page.parent is not None:
            return self.accept(page.parent, recursive=True)
        return True

    def _accept_acl(self, page: NavigationPage) -> bool:
        acl = self.get_acl()
        if acl is None:
            return True
        if page.resource is None and page.privilege is None:
            return True
        return bool(acl.is_allowed(self.get_role(), page.resource, page.privilege))

    def find_accepted(self, pages: Iterable[NavigationPage]) -> list[NavigationPage]:
        return [page for page in pages if self.accept(page)]

    # Rendering

    def render_menu(self, pages: Iterable[NavigationPage], ul_class: str = "navigation") -> Markup:
        """Render accepted pages as nested ``<ul>`` lists."""
        accepted = self.find_accepted(pages)
        if not accepted:
            return Markup("")
        items = []
        for page in accepted:
            submenu = self.render_menu(page.pages, ul_class="") if page.pages else Markup("")
            items.append(Markup('<li><a href="{}">{}</a>{}</li>').format(page.uri, page.label, submenu))
        class_attr = Markup(' class="{}"').format(ul_class) if ul_class else Markup("")
        return Markup("<ul{}>{}</ul>").format(class_attr, Markup("").join(items))

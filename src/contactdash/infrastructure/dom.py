"""In-memory document tree implementing the Document/Element ports.

Only nodes attached under the page root can be found by id, so clearing a
region makes everything that was inside it unreachable.
"""

import logging
from collections.abc import Iterator

from contactdash.application.mount_points import (
    ADD_CONTACT_FORM,
    CONTACTS_BODY,
    DASHBOARD_PARENT,
    SERVER_TIME,
    STATUS,
    SUBMIT_BUTTON,
)
from contactdash.application.ports import ClickHandler

logger = logging.getLogger(__name__)

CONTACT_FIELDS = ("firstName", "lastName", "email")
TABLE_HEADINGS = ("First name", "Last name", "Email", "")


class Node:
    """A single element: tag, optional id, text, class name and children."""

    def __init__(
        self,
        tag: str,
        id: str | None = None,
        text: str = "",
        class_name: str = "",
    ) -> None:
        self.tag = tag
        self.id = id
        self.text = text
        self.class_name = class_name
        self.on_click: ClickHandler | None = None
        self.parent: "Node | None" = None
        self._children: list[Node] = []

    def __repr__(self) -> str:
        ident = f"#{self.id}" if self.id else ""
        return f"<{self.tag}{ident} children={len(self._children)}>"

    @property
    def children(self) -> list["Node"]:
        return list(self._children)

    def append_child(self, child: "Node") -> None:
        if child.parent is not None:
            child.parent.remove_child(child)
        child.parent = self
        self._children.append(child)

    def remove_child(self, child: "Node") -> None:
        self._children.remove(child)
        child.parent = None

    def clear(self) -> None:
        for child in self._children:
            child.parent = None
        self._children = []
        self.text = ""

    def iter(self) -> Iterator["Node"]:
        """Depth-first walk starting with this node."""
        yield self
        for child in self._children:
            yield from child.iter()

    @property
    def text_content(self) -> str:
        return self.text + "".join(c.text_content for c in self._children)

    async def click(self) -> object:
        """Run the click handler. Errors are logged, never raised to the caller."""
        if self.on_click is None:
            return None
        try:
            return await self.on_click()
        except Exception:
            logger.exception("Click handler on %r failed", self)
            return None


class FormNode(Node):
    """A form holding named string fields with default values."""

    def __init__(
        self,
        id: str | None = None,
        fields: tuple[str, ...] = (),
        defaults: dict[str, str] | None = None,
    ) -> None:
        super().__init__("form", id=id)
        self._defaults = {name: "" for name in fields}
        self._defaults.update(defaults or {})
        self._values = dict(self._defaults)

    def set_value(self, name: str, value: str) -> None:
        if name not in self._values:
            raise KeyError(f"Form has no field {name!r}")
        self._values[name] = value

    def get_value(self, name: str) -> str:
        return self._values[name]

    def form_data(self) -> dict[str, str]:
        return dict(self._values)

    def reset(self) -> None:
        self._values = dict(self._defaults)


class Page:
    """Document rooted at a body node."""

    def __init__(self, root: Node | None = None) -> None:
        self.root = root if root is not None else Node("body")

    def get_element_by_id(self, element_id: str) -> Node | None:
        for node in self.root.iter():
            if node.id == element_id:
                return node
        return None

    def create_element(self, tag: str) -> Node:
        return Node(tag)


def mount_contacts_table(document: Page, parent: Node) -> Node:
    """Replace the parent's content with an empty contacts table; return its body."""
    table = document.create_element("table")
    head = document.create_element("thead")
    row = document.create_element("tr")
    for heading in TABLE_HEADINGS:
        th = document.create_element("th")
        th.text = heading
        row.append_child(th)
    head.append_child(row)
    body = document.create_element("tbody")
    body.id = CONTACTS_BODY
    table.append_child(head)
    table.append_child(body)
    parent.clear()
    parent.append_child(table)
    return body


def build_dashboard_page() -> Page:
    """Home page markup: server time, dashboard table, add-contact form, status."""
    page = Page()
    root = page.root
    root.append_child(Node("h1", text="Contacts"))

    clock = Node("p", text="Server time: ")
    clock.append_child(Node("span", id=SERVER_TIME))
    root.append_child(clock)

    dashboard = Node("div", id=DASHBOARD_PARENT)
    root.append_child(dashboard)
    mount_contacts_table(page, dashboard)

    form = FormNode(id=ADD_CONTACT_FORM, fields=CONTACT_FIELDS)
    form.append_child(Node("button", id=SUBMIT_BUTTON, text="Add contact"))
    root.append_child(form)
    root.append_child(Node("div", id=STATUS))
    return page

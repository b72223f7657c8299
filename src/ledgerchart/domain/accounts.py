"""Account universe and compressed account tree."""

from dataclasses import dataclass, field
from typing import Optional, Sequence

from ledgerchart.domain.entities import Transaction
from ledgerchart.utils.maps import get_or_insert

SEPARATOR = ":"


@dataclass
class AccountTreeNode:
    """One path segment in the account tree.

    ``exists`` is true when some input path ends exactly at this node.
    Children are keyed by label in first-seen order.
    """

    label: str
    exists: bool = False
    children: dict[str, "AccountTreeNode"] = field(default_factory=dict)


@dataclass
class AccountTree:
    """Unlabeled root holding the top-level account segments."""

    children: dict[str, AccountTreeNode] = field(default_factory=dict)

    def insert(self, path: str) -> None:
        """Add an account path, marking its final segment as existing."""
        parent = self
        for segment in path.split(SEPARATOR):
            parent = get_or_insert(parent.children, segment, lambda: AccountTreeNode(segment))
        parent.exists = True

    def render(self) -> list[str]:
        """Return existing paths whose node does not have exactly one child."""
        output: list[str] = []

        def visit(node: AccountTreeNode, path: Optional[str]) -> None:
            new_path = f"{path}{SEPARATOR}{node.label}" if path else node.label
            if len(node.children) != 1 and node.exists:
                output.append(new_path)
            for child in node.children.values():
                visit(child, new_path)

        for child in self.children.values():
            visit(child, None)
        return output


def remove_duplicate_accounts(paths: Sequence[str]) -> list[str]:
    """Drop accounts that only pass through to a single child.

    For example, given:
    - Liabilities
    - Liabilities:Credit
    - Liabilities:Credit:Chase
    - Liabilities:Credit:Citi
    "Liabilities" is removed because its only child is "Liabilities:Credit".
    """
    tree = AccountTree()
    for path in paths:
        tree.insert(path)
    return tree.render()


def collect_accounts(transactions: Sequence[Transaction]) -> list[str]:
    """Return every account posted to, in first-seen order."""
    seen: dict[str, None] = {}
    for txn in transactions:
        for line in txn.account_lines:
            seen.setdefault(line.account, None)
    return list(seen)

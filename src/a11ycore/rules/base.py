"""
Rule interface and registry.

Every evaluator is a ``Rule``: a pure function from a semantic tree to a
list of findings. The engine only talks to the registry, so rules can be
added or removed without touching orchestration.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable, Iterator, Optional

from ..logging import logger
from ..models.finding import Finding
from ..models.semantic_node import SemanticNode
from .tree import ROOT_PATH


class Rule(ABC):
    """Abstract base class describing the evaluator contract."""

    name: str = ""

    @abstractmethod
    def evaluate(self, root: SemanticNode, path: str = ROOT_PATH) -> list[Finding]:
        """Evaluate the tree rooted at ``root`` and return findings in traversal order."""

    def __call__(self, root: SemanticNode, path: str = ROOT_PATH) -> list[Finding]:
        return self.evaluate(root, path)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


class RuleRegistry:
    """
    Ordered collection of rules keyed by name.

    Registration order is iteration order. Output order does not depend on
    it, since the engine re-sorts merged findings.
    """

    def __init__(self, rules: Optional[Iterable[Rule]] = None) -> None:
        self._rules: dict[str, Rule] = {}
        for rule in rules or ():
            self.register(rule)

    def register(self, rule: Rule) -> Rule:
        if not rule.name:
            raise ValueError(f"Rule {rule!r} has no name")
        if rule.name in self._rules:
            raise ValueError(f"Rule already registered: {rule.name}")
        self._rules[rule.name] = rule
        return rule

    def unregister(self, name: str) -> Rule:
        try:
            return self._rules.pop(name)
        except KeyError:
            raise KeyError(f"Unknown rule: {name}") from None

    def get(self, name: str) -> Optional[Rule]:
        return self._rules.get(name)

    def names(self) -> list[str]:
        return list(self._rules)

    def __iter__(self) -> Iterator[Rule]:
        return iter(list(self._rules.values()))

    def __len__(self) -> int:
        return len(self._rules)

    def __contains__(self, name: object) -> bool:
        return name in self._rules

    def run(self, root: SemanticNode, path: str = ROOT_PATH) -> list[Finding]:
        """Run every rule and concatenate findings (unsorted)."""
        findings: list[Finding] = []
        for rule in self:
            produced = rule.evaluate(root, path)
            logger.debug("Rule %s produced %d findings", rule.name, len(produced))
            findings.extend(produced)
        return findings

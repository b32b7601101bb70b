# src/seo_grader/rules/registry.py
import importlib
import logging
import pkgutil
from typing import Dict, List, Optional, Tuple

from seo_grader.model import CATEGORY_ORDER

from .core import CategoryDefinition, RuleDefinition

logger = logging.getLogger(__name__)


class RuleRegistry:
    """
    Central registry for the SEO rule catalogue.

    Discovers every CategoryDefinition found in the 'seo_grader.rules.categories'
    package and freezes the rules into a tuple ordered by category
    (meta, content, technical, readability), then by registration order.
    """

    _rules: Tuple[RuleDefinition, ...] = ()
    _by_id: Dict[str, RuleDefinition] = {}
    _loaded: bool = False

    @classmethod
    def discover(cls) -> None:
        if cls._loaded:
            return

        import seo_grader.rules.categories as categories_pkg

        definitions: Dict[str, CategoryDefinition] = {}
        for _, name, _ in pkgutil.iter_modules(categories_pkg.__path__):
            full_name = f"seo_grader.rules.categories.{name}"
            try:
                module = importlib.import_module(full_name)
            except Exception as e:
                logger.error(f"Error loading rule module {name}: {e}", exc_info=True)
                continue

            defn = getattr(module, "DEFINITION", None)
            if isinstance(defn, CategoryDefinition):
                definitions[defn.category] = defn
                logger.debug(f"Rule category loaded: {defn.category} ({len(defn.rules)} rules)")

        ordered: List[RuleDefinition] = []
        by_id: Dict[str, RuleDefinition] = {}
        for category in CATEGORY_ORDER:
            defn = definitions.get(category)
            if defn is None:
                logger.warning(f"No rules registered for category '{category}'")
                continue
            for rule in defn.rules:
                if rule.id in by_id:
                    logger.error(f"Duplicate rule id '{rule.id}' ignored")
                    continue
                by_id[rule.id] = rule
                ordered.append(rule)

        cls._rules = tuple(ordered)
        cls._by_id = by_id
        cls._loaded = True
        logger.info(f"Rule catalogue ready: {len(cls._rules)} rules")

    @classmethod
    def get_all_rules(cls) -> Tuple[RuleDefinition, ...]:
        cls.discover()
        return cls._rules

    @classmethod
    def get_rules_by_category(cls, category: str) -> List[RuleDefinition]:
        return [r for r in cls.get_all_rules() if r.category == category]

    @classmethod
    def get_rule_by_id(cls, rule_id: str) -> Optional[RuleDefinition]:
        cls.discover()
        return cls._by_id.get(rule_id)

    @classmethod
    def get_rules_by_severity(cls, severity: str) -> List[RuleDefinition]:
        return [r for r in cls.get_all_rules() if r.severity == severity]

    @classmethod
    def get_all_rule_ids(cls) -> List[str]:
        """Every registered rule id, in evaluation order."""
        return [r.id for r in cls.get_all_rules()]

"""Rule seed loading from blob storage."""

from .parser import parse_json_list
from .rules import Rule
from .seeder import InMemoryRuleStore, RuleSeeder, RuleStore

__all__ = ["parse_json_list", "Rule", "InMemoryRuleStore", "RuleSeeder", "RuleStore"]

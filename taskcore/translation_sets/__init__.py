"""Translation sets."""

from taskcore.translation_sets.labels import RULE_MESSAGES  # noqa: F401

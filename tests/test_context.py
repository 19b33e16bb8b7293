"""Unit tests for taskcore.engine.context — ExecutionContext & translations."""

from taskcore.engine.context import (
    DEFAULT_LANGUAGE,
    ExecutionContext,
    clear_execution_context,
    get_execution_context,
    get_preferred_language,
    resolve_translation,
    set_execution_context,
)

TRANSLATIONS = {
    "greeting": {"pt": "Olá, {name}", "en": "Hello, {name}"},
    "only_pt": {"pt": "Somente português"},
    "only_fr": {"fr": "Bonjour"},
}


class TestExecutionContext:
    def test_defaults(self):
        ctx = ExecutionContext(user_id=1)
        assert ctx.username == "anonymous"
        assert ctx.preferred_language == DEFAULT_LANGUAGE == "pt"
        assert ctx.execution_id.startswith("exec_")
        assert len(ctx.execution_id) == len("exec_") + 12

    def test_unique_execution_ids(self):
        assert ExecutionContext(user_id=1).execution_id != ExecutionContext(user_id=1).execution_id

    def test_to_dict(self):
        ctx = ExecutionContext(user_id=5, username="bia", execution_id="exec_x", preferred_language="en")
        assert ctx.to_dict() == {
            "user_id": 5,
            "username": "bia",
            "execution_id": "exec_x",
            "preferred_language": "en",
        }

    def test_set_get_clear(self):
        assert get_execution_context() is None
        ctx = ExecutionContext(user_id=2)
        set_execution_context(ctx)
        assert get_execution_context() is ctx
        clear_execution_context()
        assert get_execution_context() is None

    def test_preferred_language(self):
        assert get_preferred_language() == "pt"
        set_execution_context(ExecutionContext(user_id=1, preferred_language="en"))
        assert get_preferred_language() == "en"


class TestResolveTranslation:
    def test_explicit_language(self):
        assert resolve_translation(TRANSLATIONS, "greeting", lang="en", name="Ana") == "Hello, Ana"

    def test_context_language(self):
        set_execution_context(ExecutionContext(user_id=1, preferred_language="en"))
        assert resolve_translation(TRANSLATIONS, "greeting", name="Ana") == "Hello, Ana"

    def test_falls_back_to_portuguese(self):
        assert resolve_translation(TRANSLATIONS, "only_pt", lang="en") == "Somente português"

    def test_missing_key_returns_key(self):
        assert resolve_translation(TRANSLATIONS, "nope") == "nope"

    def test_no_usable_language_returns_key(self):
        assert resolve_translation(TRANSLATIONS, "only_fr", lang="en") == "only_fr"

    def test_mismatched_params_leave_text(self):
        assert resolve_translation(TRANSLATIONS, "greeting", lang="pt", other=1) == "Olá, {name}"

"""Unit tests for taskcore.engine.errors — Error hierarchy & serialization."""

import json

from taskcore.engine.errors import (
    INVALID_DUE_DATE,
    VALIDATION_ERROR,
    TaskBusinessRuleError,
    TaskConfigError,
    TaskCoreError,
    TaskTransportError,
    TaskValidationError,
    error_for_code,
)


class TestTaskCoreError:
    """Base error class tests."""

    def test_basic_creation(self):
        err = TaskCoreError("something broke")
        assert err.message == "something broke"
        assert str(err) == "something broke"
        assert err.error_type == "TaskCoreError"
        assert err.execution_id is None

    def test_to_dict(self):
        err = TaskCoreError("fail", execution_id="exec_1", source="cli")
        d = err.to_dict()
        assert d["error_type"] == "TaskCoreError"
        assert d["message"] == "fail"
        assert d["execution_id"] == "exec_1"
        assert d["context"] == {"source": "cli"}
        assert "timestamp" in d

    def test_to_json(self):
        parsed = json.loads(TaskCoreError("fail", execution_id="exec_1").to_json())
        assert parsed["message"] == "fail"

    def test_repr(self):
        err = TaskCoreError("fail", execution_id="exec_9")
        assert repr(err) == "TaskCoreError: fail | execution_id=exec_9"


class TestValidationErrors:
    def test_hierarchy(self):
        assert issubclass(TaskValidationError, TaskCoreError)
        assert issubclass(TaskBusinessRuleError, TaskValidationError)
        assert issubclass(TaskTransportError, TaskCoreError)
        assert issubclass(TaskConfigError, TaskCoreError)

    def test_codes(self):
        assert TaskValidationError("x").code == VALIDATION_ERROR
        assert TaskBusinessRuleError("x").code == INVALID_DUE_DATE

    def test_fields(self):
        details = [{"field": "titulo", "rule": "invalid_title", "message": "m"}]
        err = TaskValidationError(
            "m", field="titulo", rule="invalid_title", validation_errors=details
        )
        assert err.field == "titulo"
        assert err.rule == "invalid_title"
        assert err.validation_errors == details

    def test_to_dict_keeps_details_out_of_context(self):
        err = TaskValidationError(
            "m", field="titulo", validation_errors=[{"field": "titulo"}]
        )
        d = err.to_dict()
        assert d["code"] == VALIDATION_ERROR
        assert d["validation_errors"] == [{"field": "titulo"}]
        assert "validation_errors" not in d["context"]

    def test_envelope(self):
        err = TaskBusinessRuleError(
            "A data de vencimento não pode ser anterior à data atual",
            field="data_vencimento",
            rule="due_date_in_past",
        )
        assert err.to_envelope() == {
            "message": "A data de vencimento não pode ser anterior à data atual",
            "code": INVALID_DUE_DATE,
            "field": "data_vencimento",
            "rule": "due_date_in_past",
            "details": [],
        }


class TestTransportError:
    def test_status(self):
        err = TaskTransportError("bad gateway", status_code=502, response_body="oops")
        assert err.status_code == 502
        assert err.response_body == "oops"
        assert err.to_dict()["status_code"] == 502


class TestErrorForCode:
    def test_mapping(self):
        assert error_for_code(INVALID_DUE_DATE) is TaskBusinessRuleError
        assert error_for_code(VALIDATION_ERROR) is TaskValidationError
        assert error_for_code(None) is TaskValidationError

from __future__ import annotations

import pytest

from caret_engine.runtime import telemetry


def test_configure_rejects_config_and_preset_together() -> None:
    with pytest.raises(ValueError):
        telemetry.configure(config=object(), preset="development")


def test_configure_rejects_unknown_preset() -> None:
    with pytest.raises(ValueError):
        telemetry.configure(preset="chatty")


def test_get_logger_is_cached() -> None:
    assert telemetry.get_logger("caret_engine.tests") is telemetry.get_logger(
        "caret_engine.tests"
    )


def test_span_reraises_and_keeps_metadata() -> None:
    with pytest.raises(RuntimeError):
        with telemetry.span(
            "tests::boom", component=True, metadata={"offset": 3}
        ) as handle:
            assert handle.component_name == "tests::boom"
            assert handle.metadata == {"offset": "3"}
            raise RuntimeError("boom")

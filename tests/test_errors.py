"""Tests for the Reversi error hierarchy."""

import pytest

from reversi.errors import (
    AIBusyError,
    AIError,
    ConfigurationError,
    GameNotFoundError,
    InvalidMoveError,
    InvalidStateError,
    NotYourTurnError,
    ReversiError,
    RulesViolationError,
)


class TestReversiError:
    def test_default_code(self):
        err = ReversiError("boom")
        assert err.code == "REVERSI_ERROR"
        assert err.message == "boom"
        assert err.context == {}
        assert str(err) == "[REVERSI_ERROR] boom"

    def test_custom_code_and_context(self):
        err = ReversiError("boom", code="CUSTOM", context={"a": 1})
        assert str(err) == "[CUSTOM] boom (a=1)"
        assert err.to_dict() == {
            "code": "CUSTOM",
            "message": "boom",
            "context": {"a": 1},
        }

    @pytest.mark.parametrize(
        "error_class,parent",
        [
            (RulesViolationError, ReversiError),
            (InvalidMoveError, RulesViolationError),
            (NotYourTurnError, InvalidMoveError),
            (InvalidStateError, ReversiError),
            (GameNotFoundError, ReversiError),
            (AIError, ReversiError),
            (AIBusyError, AIError),
            (ConfigurationError, ReversiError),
        ],
    )
    def test_hierarchy(self, error_class, parent):
        assert issubclass(error_class, parent)


class TestSpecificErrors:
    def test_invalid_move_context(self):
        err = InvalidMoveError("Invalid move", row=2, col=5, player=1)
        assert err.code == "INVALID_MOVE"
        assert err.context == {"position": "2,5", "player": 1}

    def test_not_your_turn_code(self):
        assert NotYourTurnError("wait").code == "NOT_YOUR_TURN"

    def test_game_not_found(self):
        err = GameNotFoundError("abc")
        assert err.game_id == "abc"
        assert err.code == "GAME_NOT_FOUND"
        assert "abc" in err.message

    def test_ai_busy(self):
        assert AIBusyError("busy").code == "AI_BUSY"

    def test_configuration_setting(self):
        err = ConfigurationError("bad", setting="REVERSI_LOG_LEVEL")
        assert err.setting == "REVERSI_LOG_LEVEL"
        assert err.to_dict()["context"] == {"setting": "REVERSI_LOG_LEVEL"}

    def test_catchable_as_base(self):
        with pytest.raises(ReversiError):
            raise AIBusyError("busy")

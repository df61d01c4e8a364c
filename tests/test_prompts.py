"""Tests for the questionary prompts (cli/prompts.py).

questionary itself is mocked, so there is no terminal interaction.
"""

from __future__ import annotations

from collections.abc import Iterator
from unittest.mock import MagicMock, patch

import pytest

from lbcli.cli.prompts import ask_credentials, confirm


@pytest.fixture()
def questionary() -> Iterator[MagicMock]:
    fake = MagicMock()
    with patch("lbcli.cli.prompts._import_questionary", return_value=fake):
        yield fake


class TestAskCredentials:
    def test_password_is_masked_prompt(self, questionary: MagicMock) -> None:
        questionary.text.return_value.unsafe_ask.return_value = "alice"
        questionary.password.return_value.unsafe_ask.return_value = "s3cret"

        assert ask_credentials() == ("alice", "s3cret")
        questionary.text.assert_called_once_with("Enter username:")
        questionary.password.assert_called_once_with("Enter password:")

    def test_interrupt_propagates(self, questionary: MagicMock) -> None:
        questionary.text.return_value.unsafe_ask.side_effect = KeyboardInterrupt

        with pytest.raises(KeyboardInterrupt):
            ask_credentials()
        questionary.password.assert_not_called()


class TestConfirm:
    @pytest.mark.parametrize("answer", [True, False])
    def test_returns_answer(self, questionary: MagicMock, answer: bool) -> None:
        questionary.confirm.return_value.unsafe_ask.return_value = answer

        assert confirm("Sure?") is answer
        questionary.confirm.assert_called_once_with("Sure?", default=True)

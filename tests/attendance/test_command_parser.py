import pytest

from src.whatsapp_attendance.whatsapp_attendance.attendance.parser import parse_command
from src.whatsapp_attendance.whatsapp_attendance.core.enums import CommandKind


@pytest.mark.parametrize(
    "text, expected",
    [
        ("entrada", CommandKind.CLOCK_IN),
        ("saida", CommandKind.CLOCK_OUT),
        ("saída", CommandKind.CLOCK_OUT),
        ("pausa", CommandKind.BREAK_START),
        ("volta", CommandKind.BREAK_END),
    ],
)
def test_tokens_map_to_command_kinds(text, expected):
    assert parse_command(text) is expected


def test_case_and_surrounding_whitespace_are_ignored():
    assert parse_command("  ENTRADA \n") is CommandKind.CLOCK_IN
    assert parse_command("Saída") is CommandKind.CLOCK_OUT
    assert parse_command("\tPausa") is CommandKind.BREAK_START


@pytest.mark.parametrize("text", ["xyz123", "", "   ", None, "entrad", "entrada agora", "voltar", "sai da"])
def test_anything_else_is_unrecognized(text):
    assert parse_command(text) is None

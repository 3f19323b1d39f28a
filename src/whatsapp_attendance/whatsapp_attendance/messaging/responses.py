"""Reply texts sent back to the employee over WhatsApp."""

from __future__ import annotations

from ..common.datetime_utils import format_hhmm
from ..core.enums import CommandKind, PresenceStatus
from ..core.exceptions import InvalidTransitionError
from ..attendance.model import AttendanceEvent

CONFIRMATIONS: dict[CommandKind, str] = {
    CommandKind.CLOCK_IN: "✅ Entrada registrada com sucesso! ⏰ Horário: {time}",
    CommandKind.BREAK_START: "⏸️ Pausa iniciada! ⏰ Horário: {time}",
    CommandKind.BREAK_END: "▶️ Volta da pausa registrada! ⏰ Horário: {time}",
    CommandKind.CLOCK_OUT: "🏁 Saída registrada com sucesso! ⏰ Horário: {time}",
}

COMMAND_LABELS: dict[CommandKind, str] = {
    CommandKind.CLOCK_IN: "entrada",
    CommandKind.CLOCK_OUT: "saída",
    CommandKind.BREAK_START: "pausa",
    CommandKind.BREAK_END: "volta",
}

STATUS_LABELS: dict[PresenceStatus, str] = {
    PresenceStatus.WORKING: "trabalhando",
    PresenceStatus.ON_BREAK: "em pausa",
    PresenceStatus.OFF_DUTY: "saiu",
    PresenceStatus.ABSENT: "ausente",
}

UNKNOWN_SENDER = "❌ Número não cadastrado ou inativo. Procure o RH para liberar seu acesso."

HELP = (
    "❓ Comando não reconhecido.\n"
    "Comandos disponíveis:\n"
    "• entrada - registra entrada no trabalho\n"
    "• saida - registra saída do trabalho\n"
    "• pausa - inicia pausa/intervalo\n"
    "• volta - retorna da pausa"
)


def confirmation(event: AttendanceEvent) -> str:
    return CONFIRMATIONS[event.kind].format(time=format_hhmm(event.timestamp))


def invalid_transition(error: InvalidTransitionError) -> str:
    return (
        f"⚠️ Não foi possível registrar {COMMAND_LABELS[error.command]}: "
        f"seu status atual é \"{STATUS_LABELS[error.status]}\"."
    )

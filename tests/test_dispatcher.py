import asyncio

import pytest

from ai_bot.core import replies
from ai_bot.core.strategies import JOKE_MARKER
from ai_bot.models import ChatState

from tests.helpers import SAMPLE_CONVERSATION, group_message, private_message

pytestmark = pytest.mark.asyncio

# ---------------------------------------------------------------------------
# Joke cadence
# ---------------------------------------------------------------------------

async def test_joke_fires_once_when_count_first_reaches_three(dispatcher, store, responder):
    results = [await dispatcher.handle(group_message(f"¿pedimos pizza {i}?")) for i in range(1, 4)]

    assert results[:2] == [None, None]
    assert results[2].startswith(JOKE_MARKER)
    assert len(responder.jokes) == 1
    assert store.trigger.count("-100") == 0

async def test_cadence_restarts_after_firing(dispatcher, responder):
    replies_seen = [await dispatcher.handle(group_message(f"mensaje {i}")) for i in range(1, 7)]
    fired = [i for i, r in enumerate(replies_seen, start=1) if r]
    assert fired == [3, 6]
    assert len(responder.jokes) == 2

async def test_firing_does_not_clear_buffer(dispatcher, store):
    for i in range(3):
        await dispatcher.handle(group_message(f"mensaje {i}"))
    assert len(store.buffer.entries("-100")) == 3

async def test_joke_prompt_uses_rendered_context(dispatcher, responder):
    await dispatcher.handle(group_message("hola", sender="Ana"))
    await dispatcher.handle(group_message("qué tal", sender="Luis"))
    await dispatcher.handle(group_message("bien", sender="Eva"))
    assert responder.jokes == ["Ana: hola\nLuis: qué tal\nEva: bien"]

async def test_inappropriate_context_leaves_counter_climbing(dispatcher, store, responder):
    # Current behavior: once the window is missed no automatic joke fires again
    await dispatcher.handle(group_message("hubo un accidente en la tienda"))
    for i in range(7):
        assert await dispatcher.handle(group_message(f"seguimos {i}")) is None

    assert responder.jokes == []
    assert store.trigger.count("-100") == 8

async def test_ai_failure_on_automatic_joke_is_silent_and_keeps_count(dispatcher, store, responder):
    responder.fail = True
    for i in range(3):
        assert await dispatcher.handle(group_message(f"mensaje {i}")) is None
    assert store.trigger.count("-100") == 3

    # Still inside the window at 4, so one more attempt is made
    responder.fail = False
    reply = await dispatcher.handle(group_message("otro"))
    assert reply.startswith(JOKE_MARKER)
    assert store.trigger.count("-100") == 0

async def test_private_chats_buffer_but_never_fire(dispatcher, store, responder):
    for i in range(6):
        assert await dispatcher.handle(private_message(f"hola {i}")) is None
    assert responder.jokes == []
    assert store.trigger.count("42") == 6
    assert len(store.buffer.entries("42")) == 6

async def test_commands_do_not_touch_buffer_or_counter(dispatcher, store):
    await dispatcher.handle(group_message("/help"))
    await dispatcher.handle(group_message("/ayuda_ventas"))
    assert store.buffer.entries("-100") == []
    assert store.trigger.count("-100") == 0

async def test_blank_messages_are_ignored(dispatcher, store):
    assert await dispatcher.handle(group_message("   ")) is None
    assert "-100" not in store.sessions

# ---------------------------------------------------------------------------
# Manual joke
# ---------------------------------------------------------------------------

async def test_manual_joke_uses_default_topic_without_context(dispatcher, responder):
    reply = await dispatcher.handle(private_message("/chiste"))
    assert reply.startswith(JOKE_MARKER)
    assert responder.jokes == [replies.EMPTY_CONTEXT_TOPIC]

async def test_manual_joke_ignores_filter_and_counter(dispatcher, store, responder):
    await dispatcher.handle(group_message("qué dolor de cabeza"))
    reply = await dispatcher.handle(group_message("/chiste"))
    assert reply.startswith(JOKE_MARKER)
    assert store.trigger.count("-100") == 1

async def test_manual_joke_when_service_unavailable(dispatcher, responder):
    responder.available = False
    assert await dispatcher.handle(private_message("/chiste")) == replies.JOKES_UNAVAILABLE
    assert responder.jokes == []

async def test_manual_joke_apologizes_on_ai_failure(dispatcher, responder):
    responder.fail = True
    assert await dispatcher.handle(private_message("/chiste")) == replies.JOKE_FAILED

# ---------------------------------------------------------------------------
# Session state machine
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("command,state", [
    ("/rechazar_devolucion", ChatState.AWAITING_REFUND_INPUT),
    ("/upselling", ChatState.AWAITING_UPSELL_INPUT),
    ("/motivar_compra", ChatState.AWAITING_MOTIVATION_INPUT),
])
async def test_payload_command_without_argument_awaits_input(dispatcher, store, command, state):
    reply = await dispatcher.handle(private_message(command))
    assert reply.startswith("📝")
    assert store.session("42").state is state

async def test_next_freeform_message_is_consumed_as_payload(dispatcher, store, responder):
    await dispatcher.handle(private_message("/rechazar_devolucion"))
    reply = await dispatcher.handle(private_message(SAMPLE_CONVERSATION))

    assert "🚫 ESTRATEGIA: Rechazo de Devolución" in reply
    assert responder.advice in reply
    assert reply.endswith(replies.ADVICE_FOOTER)
    assert store.session("42").state is ChatState.NORMAL
    # The payload never reaches the joke path
    assert store.buffer.entries("42") == []
    assert store.trigger.count("42") == 0

async def test_invalid_payload_still_returns_to_normal(dispatcher, store, responder):
    await dispatcher.handle(private_message("/rechazar_devolucion"))
    reply = await dispatcher.handle(private_message("muy corto"))

    assert reply == replies.INVALID_CONVERSATION
    assert store.session("42").state is ChatState.NORMAL
    assert responder.analyses == []

async def test_payload_command_with_argument_runs_immediately(dispatcher, store, responder):
    reply = await dispatcher.handle(private_message(f"/upselling {SAMPLE_CONVERSATION}"))
    assert "📈 ESTRATEGIA: Upselling" in reply
    assert responder.analyses[0][0] == SAMPLE_CONVERSATION
    assert store.session("42").state is ChatState.NORMAL

async def test_other_commands_keep_awaiting_state(dispatcher, store):
    await dispatcher.handle(private_message("/motivar_compra"))
    for command in ("/help", "/estado", "/ayuda_ventas", "/loquesea"):
        await dispatcher.handle(private_message(command))
    assert store.session("42").state is ChatState.AWAITING_MOTIVATION_INPUT

async def test_start_resets_state(dispatcher, store):
    await dispatcher.handle(private_message("/upselling"))
    assert await dispatcher.handle(private_message("/start")) == replies.WELCOME
    assert store.session("42").state is ChatState.NORMAL

async def test_advice_unavailable(dispatcher, responder):
    responder.available = False
    reply = await dispatcher.handle(private_message(f"/motivar_compra {SAMPLE_CONVERSATION}"))
    assert "no está disponible" in reply
    assert responder.analyses == []

async def test_advice_apology_on_ai_failure(dispatcher, responder):
    responder.fail = True
    reply = await dispatcher.handle(private_message(f"/rechazar_devolucion {SAMPLE_CONVERSATION}"))
    assert reply == replies.advice_failed("rechazo de devolución")
    assert dispatcher.sales.total_advice() == 0

async def test_successful_advice_is_counted(dispatcher):
    await dispatcher.handle(private_message(f"/upselling {SAMPLE_CONVERSATION}"))
    await dispatcher.handle(private_message(f"/upselling {SAMPLE_CONVERSATION}"))
    assert dispatcher.sales.advisory_count["upselling"] == 2
    assert dispatcher.sales.total_advice() == 2

# ---------------------------------------------------------------------------
# Validation boundaries
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("length,accepted", [(49, False), (50, True), (10_000, True), (10_001, False)])
async def test_payload_length_boundaries(dispatcher, responder, length, accepted):
    await dispatcher.handle(private_message("/upselling"))
    reply = await dispatcher.handle(private_message("a" * length))
    assert (reply != replies.INVALID_CONVERSATION) is accepted
    assert len(responder.analyses) == (1 if accepted else 0)

# ---------------------------------------------------------------------------
# Other commands
# ---------------------------------------------------------------------------

async def test_commands_are_case_insensitive(dispatcher):
    assert await dispatcher.handle(private_message("/HELP")) == replies.HELP

async def test_unknown_command(dispatcher):
    assert await dispatcher.handle(private_message("/bailar")) == replies.unknown_command("/bailar")

async def test_group_command_addressed_to_this_bot(dispatcher):
    assert await dispatcher.handle(group_message("/help@ventas_bot")) == replies.HELP

async def test_group_command_addressed_to_another_bot_is_ignored(dispatcher):
    assert await dispatcher.handle(group_message("/help@otro_bot")) is None

async def test_general_analysis_is_local(dispatcher, store, responder):
    assert await dispatcher.handle(private_message("/analisis_general")) == replies.ANALYSIS_PROMPT
    assert store.session("42").state is ChatState.NORMAL

    reply = await dispatcher.handle(private_message(f"/analisis_general {SAMPLE_CONVERSATION}"))
    assert reply.startswith("📊 ANÁLISIS GENERAL DE VENTAS")
    assert f"Longitud: {len(SAMPLE_CONVERSATION)} caracteres" in reply
    assert "Líneas de diálogo: 2" in reply
    assert responder.analyses == []

async def test_status_reports_services(dispatcher):
    await dispatcher.handle(group_message("hola"))
    reply = await dispatcher.handle(group_message("/estado"))
    assert "✅ Activo" in reply
    assert "Chats activos: 1" in reply
    assert "Mensajes procesados: 1" in reply

async def test_clear_context_resets_buffer_counter_and_state(dispatcher, store):
    await dispatcher.handle(group_message("hubo un accidente"))
    await dispatcher.handle(group_message("uf"))
    await dispatcher.handle(group_message("/upselling"))

    assert await dispatcher.handle(group_message("/limpiar_contexto")) == replies.CONTEXT_CLEARED
    assert store.buffer.entries("-100") == []
    assert store.trigger.count("-100") == 0
    assert store.session("-100").state is ChatState.NORMAL

async def test_clear_context_restores_cadence(dispatcher, responder):
    for text in ("hubo un problema", "uno", "dos", "tres", "cuatro"):
        await dispatcher.handle(group_message(text))
    await dispatcher.handle(group_message("/limpiar_contexto"))

    results = [await dispatcher.handle(group_message(f"nuevo {i}")) for i in range(3)]
    assert results[2].startswith(JOKE_MARKER)

async def test_unexpected_error_becomes_generic_reply(dispatcher, monkeypatch):
    async def explode(message):
        raise RuntimeError("kaboom")

    monkeypatch.setattr(dispatcher.jokes, "process_message", explode)
    assert await dispatcher.handle(group_message("hola")) == replies.GENERIC_ERROR
    # The chat is still usable afterwards
    assert await dispatcher.handle(group_message("/help")) == replies.HELP

async def test_last_activity_and_statistics(dispatcher):
    await dispatcher.handle(private_message("/upselling"))
    stats = dispatcher.statistics()
    assert stats["active_chats"] == 1
    assert stats["states"] == {"42": "AWAITING_UPSELL_INPUT"}
    assert "42" in stats["last_activity"]

# ---------------------------------------------------------------------------
# Concurrency
# ---------------------------------------------------------------------------

async def test_same_chat_messages_are_serialized_in_order(dispatcher, store):
    messages = [group_message(f"mensaje {i}") for i in range(14)]
    await asyncio.gather(*(dispatcher.handle(m) for m in messages))

    texts = [entry.text for entry in store.buffer.entries("-100")]
    assert texts == [f"mensaje {i}" for i in range(4, 14)]

async def test_distinct_chats_do_not_see_each_other(dispatcher, store):
    chat_a = [group_message(f"a{i}", chat_id="A") for i in range(5)]
    chat_b = [private_message(f"b{i}", chat_id="B") for i in range(5)]
    await asyncio.gather(*(dispatcher.handle(m) for pair in zip(chat_a, chat_b) for m in pair))

    assert all(e.text.startswith("a") for e in store.buffer.entries("A"))
    assert all(e.text.startswith("b") for e in store.buffer.entries("B"))
    assert store.trigger.count("B") == 5

async def test_slow_ai_call_does_not_block_other_chats(dispatcher, store, responder):
    responder.gate = asyncio.Event()
    for i in range(2):
        await dispatcher.handle(group_message(f"a{i}", chat_id="A"))

    # Third message in chat A triggers a joke that waits on the gate
    pending = asyncio.ensure_future(dispatcher.handle(group_message("a2", chat_id="A")))
    await asyncio.sleep(0)
    await asyncio.sleep(0)
    assert store.lock("A").locked()

    assert await asyncio.wait_for(dispatcher.handle(private_message("/help", chat_id="B")), timeout=1) == replies.HELP

    responder.gate.set()
    assert (await pending).startswith(JOKE_MARKER)

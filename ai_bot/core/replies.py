"""User-facing text for the bot (Spanish, like the command names)."""

from datetime import datetime

WELCOME = (
    "🤖 ¡Hola! Soy tu Asistente de IA\n\n"
    "🎭 En grupos: Genero chistes basados en la conversación cada 3-4 mensajes\n"
    "💼 En chats privados: Asesoro ventas analizando conversaciones\n\n"
    "📋 Comandos disponibles:\n"
    "• /help - Ver todos los comandos\n"
    "• /chiste - Generar chiste manual\n"
    "• /ayuda_ventas - Ayuda para asesoría de ventas\n"
    "• /estado - Ver estado del bot\n\n"
    "✨ ¡Empecemos!"
)

HELP = (
    "🆘 AYUDA - Comandos disponibles:\n\n"
    "🎭 CHISTES:\n"
    "• /chiste - Generar chiste manual\n"
    "• /limpiar_contexto - Limpiar historial de mensajes\n\n"
    "💼 ASESORÍA DE VENTAS:\n"
    "• /rechazar_devolucion - Consejos para rechazar devoluciones\n"
    "• /upselling - Estrategias de upselling\n"
    "• /motivar_compra - Técnicas de motivación\n"
    "• /analisis_general - Análisis general de conversación\n"
    "• /ayuda_ventas - Ayuda detallada de ventas\n\n"
    "🔧 UTILIDADES:\n"
    "• /estado - Estado del bot y servicios\n"
    "• /help - Esta ayuda\n\n"
    "💡 Tip: En grupos genero chistes automáticamente. "
    "En chats privados uso los comandos de ventas."
)

SALES_HELP = (
    "🔧 AYUDA - Asesor de Ventas\n\n"
    "📝 Cómo usar:\n"
    "1. Copia la conversación entre cliente y vendedor\n"
    "2. Usa uno de estos comandos seguido de la conversación:\n\n"
    "🚫 /rechazar_devolucion [conversación]\n"
    "   - Consejos para rechazar devoluciones diplomáticamente\n\n"
    "📈 /upselling [conversación]\n"
    "   - Estrategias para vender productos mejores\n\n"
    "💪 /motivar_compra [conversación]\n"
    "   - Técnicas para motivar la compra\n\n"
    "📊 /analisis_general [conversación]\n"
    "   - Análisis general con recomendaciones\n\n"
    "⚠️ Requisitos:\n"
    "• La conversación debe tener entre 50 y 10,000 caracteres\n"
    "• Incluye tanto mensajes del cliente como del vendedor\n"
    "• Usa formato: 'Cliente: mensaje' y 'Vendedor: mensaje'"
)

REFUND_PROMPT = (
    "📝 Envía la conversación cliente-vendedor después del comando.\n"
    "Ejemplo: /rechazar_devolucion Cliente: Quiero devolver... Vendedor: ..."
)
PAYLOAD_PROMPT = "📝 Envía la conversación cliente-vendedor después del comando."
ANALYSIS_PROMPT = "📝 Envía la conversación para analizar después del comando."

INVALID_CONVERSATION = "❌ Conversación inválida. Debe tener entre 50 y 10,000 caracteres."
CONTEXT_CLEARED = "🧹 Contexto limpiado. El historial de mensajes se ha reiniciado."
JOKES_UNAVAILABLE = "😅 El servicio de chistes no está disponible en este momento."
JOKE_FAILED = "😅 Lo siento, no puedo generar un chiste en este momento."
GENERIC_ERROR = "😅 Ups, algo salió mal procesando tu mensaje. Inténtalo de nuevo."
EMPTY_CONTEXT_TOPIC = "conversación general"

ADVICE_FOOTER = "📋 Consejo generado por IA"

def timestamp(seconds: bool = False) -> str:
    fmt = "%d/%m/%Y %H:%M:%S" if seconds else "%d/%m/%Y %H:%M"
    return datetime.now().strftime(fmt)

def unknown_command(command: str) -> str:
    return f"❓ Comando desconocido: {command}\nUsa /help para ver los comandos disponibles."

def advice(header: str, text: str) -> str:
    return f"{header}\n⏰ {timestamp()}\n\n{text}\n\n{ADVICE_FOOTER}"

def advice_failed(topic: str) -> str:
    return (
        f"❌ Error: No pude analizar la conversación para {topic}. "
        "Verifica que el servicio de IA esté disponible."
    )

def advice_unavailable(topic: str) -> str:
    return f"⚠️ El servicio de asesoría para {topic} no está disponible en este momento. Inténtalo más tarde."

def general_analysis(conversation: str) -> str:
    lines = len(conversation.split("\n"))
    return (
        "📊 ANÁLISIS GENERAL DE VENTAS\n\n"
        "📝 Resumen de la conversación:\n"
        f"• Longitud: {len(conversation)} caracteres\n"
        f"• Líneas de diálogo: {lines}\n\n"
        "💡 Recomendaciones generales:\n"
        "• Usa las estrategias específicas para análisis detallado\n"
        "• Comandos disponibles:\n"
        "  - /rechazar_devolucion - Para rechazar devoluciones\n"
        "  - /upselling - Para técnicas de upselling\n"
        "  - /motivar_compra - Para motivar la compra\n\n"
        f"⏰ Análisis realizado: {timestamp()}"
    )

def status(jokes_available: bool, active_chats: int, pending_messages: int,
           sales_available: bool, total_advice: int) -> str:
    def flag(available: bool) -> str:
        return "✅ Activo" if available else "❌ Inactivo"

    return (
        "🔧 ESTADO DEL BOT\n\n"
        "🎭 Servicio de Chistes:\n"
        f"• Estado: {flag(jokes_available)}\n"
        f"• Chats activos: {active_chats}\n"
        f"• Mensajes procesados: {pending_messages}\n\n"
        "💼 Servicio de Ventas:\n"
        f"• Estado: {flag(sales_available)}\n"
        f"• Consejos dados: {total_advice}\n\n"
        f"⏰ Última actualización: {timestamp(seconds=True)}"
    )

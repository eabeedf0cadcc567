import logging
import sys
from typing import Optional

from telegram import Update
from telegram.ext import Application, CommandHandler, ContextTypes, MessageHandler, filters

from agent.errors import NotReadyError
from agent.polkadot_agent import PolkadotAgent
from config.settings import settings
from models.agent_config import AgentConfig

logging.basicConfig(
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    level=logging.INFO
)

logger = logging.getLogger(__name__)


polkadot_agent: Optional[PolkadotAgent] = None


async def on_startup(application: Application) -> None:
    global polkadot_agent

    polkadot_agent = PolkadotAgent(AgentConfig.from_settings(settings))
    await polkadot_agent.wait_for_ready(timeout=settings.READY_TIMEOUT_SECONDS)
    logger.info("Polkadot agent initialized")


async def on_shutdown(application: Application) -> None:
    if polkadot_agent is not None:
        await polkadot_agent.disconnect()
        logger.info("Polkadot agent disconnected")


async def start_command(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """
    Handler for the /start command.
    """
    await update.message.reply_text(
        "👋 Hello! I am the Polkadot AI agent.\n\n"
        "⚙️ I can help you with:\n"
        "- Adding, checking and removing proxies\n"
        "- Cross-chain (XCM) transfers between the relay chain and parachains\n\n"
        "✍️ Describe what you need in plain words.\n"
        "📋 Use /help to see sample commands."
    )


async def help_command(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """
    Handler for the /help command.
    """
    await update.message.reply_text(
        "📖 Bot Help\n\n"
        "Available actions:\n"
        "1. Add proxy - \"Add proxy 5F...\"\n"
        "2. Check proxy - \"Is 5F... my proxy?\"\n"
        "3. Remove proxy - \"Remove proxy 5F...\"\n"
        "4. XCM transfer - \"Transfer 0.1 WND from Westend to 1000\"\n\n"
        "Describe what you need in simple words and I will handle the rest."
    )


async def handle_message(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """
    Handler for incoming text messages.
    """
    user_id = str(update.effective_user.id)
    user_message = update.message.text

    logger.info(f"Received message from user {user_id}: {user_message}")

    if polkadot_agent is None or not polkadot_agent.is_ready:
        await update.message.reply_text("⏳ The agent is still starting up. Please try again in a moment.")
        return

    await update.message.reply_text("⏳ Processing your request...")

    try:
        response_text = await polkadot_agent.handle_prompt(user_message)
    except NotReadyError as e:
        logger.warning("Agent not ready: %s", e)
        await update.message.reply_text("⏳ The agent is not connected yet. Please try again in a moment.")
        return

    await update.message.reply_text(response_text)

    logger.info(f"Response sent to user {user_id}")


async def error_handler(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """
    Global error handler.
    """
    logger.error(f"Error while handling update: {context.error}", exc_info=context.error)

    if update and update.effective_message:
        await update.effective_message.reply_text(
            "❌ An unexpected error occurred. Please try again later."
        )


def main():
    """
    Entry point for running the bot.
    """
    if not settings.validate():
        logger.error("Not all required environment variables are set")
        sys.exit(1)

    logger.info("Starting the Polkadot AI agent bot...")

    application = (
        Application.builder()
        .token(settings.TELEGRAM_BOT_TOKEN)
        .post_init(on_startup)
        .post_shutdown(on_shutdown)
        .build()
    )

    application.add_handler(CommandHandler("start", start_command))
    application.add_handler(CommandHandler("help", help_command))
    application.add_handler(MessageHandler(filters.TEXT & ~filters.COMMAND, handle_message))

    application.add_error_handler(error_handler)

    logger.info("Bot started and ready to work!")

    application.run_polling(allowed_updates=Update.ALL_TYPES)


if __name__ == '__main__':
    main()

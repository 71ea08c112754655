from contextlib import asynccontextmanager

from fastapi import BackgroundTasks, FastAPI, Header, HTTPException, Request

from audityzer_bot.config import get_settings
from audityzer_bot.telegram_bot import bot
from audityzer_bot.telegram_bot.bot import handle_telegram_update, initialize_bot, shutdown_bot
from audityzer_bot.telegram_bot.logging_config import bot_logger as logger, setup_logging

VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(_: FastAPI):
    """Initialize bot on startup; a failed initialization aborts startup."""
    setup_logging(get_settings().log_level)
    logger.info("[STARTUP] Initializing Telegram bot...")
    await initialize_bot()
    logger.info("[STARTUP] Bot ready")
    try:
        yield
    finally:
        logger.info("[SHUTDOWN] Shutting down Telegram bot...")
        await shutdown_bot()


app = FastAPI(
    title="Audityzer Bot API",
    description="Telegram front controller for smart contract audits",
    version=VERSION,
    lifespan=lifespan
)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    settings = get_settings()
    # Read the live instance only; building one here would leak an HTTP client
    dispatcher = bot._dispatcher
    return {
        "status": "ok",
        "environment": settings.environment,
        "version": VERSION,
        "bot_username": dispatcher.bot_username if dispatcher else None
    }


# Telegram webhook endpoint
@app.post("/telegram/webhook")
async def telegram_webhook(
    request: Request,
    background_tasks: BackgroundTasks,
    x_telegram_bot_api_secret_token: str = Header(None)
):
    """
    Webhook endpoint for Telegram updates.

    Always answers 200 to an authenticated request, otherwise Telegram keeps
    redelivering the update.
    """
    settings = get_settings()

    # Verify secret token if configured
    if settings.telegram_webhook_secret:
        if x_telegram_bot_api_secret_token != settings.telegram_webhook_secret:
            raise HTTPException(status_code=403, detail="Invalid secret token")

    try:
        update_data = await request.json()
    except ValueError:
        logger.warning("Received non-JSON webhook body")
        return {"ok": True}

    # Handle update after the response is sent (fast 200 OK)
    background_tasks.add_task(handle_telegram_update, update_data)

    return {"ok": True}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)

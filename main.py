"""
main.py
-------
Entry point for the gdrive4discord bot.

Responsibilities:
    - Authorize access to Google Drive (interactive on the first run).
    - Configure and start the Discord client with all handlers.
"""

import sys

import discord

import config
from drive.auth import DriveAuthError, build_drive_service, load_credentials
from drive.client import DriveClient
from handlers.message_handler import register_handlers
from services.drive_embed_service import DriveEmbedService
from utils.logger import get_logger

logger = get_logger(__name__)


def create_client() -> discord.Client:
    """Discord client with the intents needed to read guild message content."""
    intents = discord.Intents.none()
    intents.guilds = True
    intents.guild_messages = True
    intents.message_content = True
    return discord.Client(
        intents=intents,
        activity=discord.Activity(type=discord.ActivityType.watching, name=config.BOT_ACTIVITY),
    )


def main() -> None:
    """Initialize and run the bot."""

    # ── 1. Required settings ──────────────────────────────
    try:
        config.validate()
        token = config.require_env("DISCORD_TOKEN")
        client_secrets = config.require_env("GOOGLE_CREDENTIALS")
    except config.ConfigError as e:
        logger.error(f"{e}. Copy .env.example to .env and fill it in.")
        sys.exit(1)

    # ── 2. Google Drive ───────────────────────────────────
    logger.info("Authorizing Google Drive access...")
    try:
        credentials = load_credentials(
            client_secrets,
            tokens_dir=config.GOOGLE_TOKENS_DIR,
            port=config.OAUTH_PORT,
        )
        drive_service = build_drive_service(credentials)
    except DriveAuthError as e:
        logger.error(f"Google Drive authorization failed: {e}")
        sys.exit(1)

    drive_client = DriveClient(
        drive_service,
        max_retries=config.DRIVE_MAX_RETRIES,
        retry_delay=config.DRIVE_RETRY_DELAY_SECONDS,
    )

    # ── 3. Build the Discord client ───────────────────────
    client = create_client()
    service = DriveEmbedService(
        client,
        drive_client,
        history_size=config.HISTORY_SIZE,
        max_retries=config.MAX_RETRIES,
        retry_delay=config.RETRY_DELAY_SECONDS,
    )

    # ── 4. Register event handlers ────────────────────────
    register_handlers(client, service)

    # ── 5. Connect to the gateway ─────────────────────────
    logger.info(f"🚀 {config.APPLICATION_NAME} is running! Press Ctrl+C to stop.")
    client.run(token, log_handler=None)
    logger.info(f"{config.APPLICATION_NAME} stopped.")


if __name__ == "__main__":
    main()

"""Interactive console for chatting with the bot without a messaging platform."""

import asyncio
import logging

from dotenv import load_dotenv

from .infrastructure.config import AppConfig
from .infrastructure.dependencies import ServiceContainer


async def main():
    """Run the console chat loop."""
    load_dotenv()
    logging.basicConfig(level=logging.WARNING)

    print("Walansi Kontonbile - fact-checking chat bot")
    print("-------------------------------------------")

    container = ServiceContainer(AppConfig.from_env())
    await container.initialize()
    router = container.get('message_router')

    try:
        while True:
            message = input("\nYou (or 'quit' to exit): ")
            if message.lower() in ('quit', 'exit', 'q'):
                break

            print(f"[intent: {router.detect_intent(message).value}]")
            reply = await router.route(
                platform="console",
                user_id="console-user",
                chat_id="console",
                message_text=message,
            )
            print(f"\nBot:\n{reply.text}")

    finally:
        # Clean up
        await container.shutdown()


if __name__ == "__main__":
    asyncio.run(main())

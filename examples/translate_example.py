"""Example: translate a sentence with the translate task."""

import asyncio
import os

from neuralpay_gateway import GatewayConfig, GeminiProvider, TaskRouter


async def main():
    config = GatewayConfig(api_key=os.environ.get("API_KEY"))
    router = TaskRouter(GeminiProvider(config))

    envelope = {
        "task": "translate",
        "payload": {"text": "Crypto payments for AI services.", "from": "English", "to": "German"},
    }
    result = await router.dispatch(envelope)
    print(result.status_code, result.body)


if __name__ == "__main__":
    asyncio.run(main())

"""Example: hold a short conversation through the task router.

The router keeps no chat state; the caller owns the history and resends it
with every turn, exactly as the browser client does.
"""

import asyncio
import os

from neuralpay_gateway import GatewayConfig, GeminiProvider, TaskRouter


async def main():
    router = TaskRouter(GeminiProvider(GatewayConfig(api_key=os.environ.get("API_KEY"))))
    history = []

    for message in ["Hallo! Was bietet NeuralPay an?", "Und wie bezahle ich dafür?"]:
        print(f"You: {message}")
        result = await router.dispatch({"task": "chat", "payload": {"history": history, "message": message}})
        if result.status_code != 200:
            print(f"Error: {result.body}")
            return

        reply = result.body["text"]
        print(f"AI:  {reply}\n")
        history.append({"role": "user", "parts": [{"text": message}]})
        history.append({"role": "model", "parts": [{"text": reply}]})


if __name__ == "__main__":
    asyncio.run(main())

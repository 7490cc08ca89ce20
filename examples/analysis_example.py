"""Example: request a structured analysis and print its sections."""

import asyncio
import os

from neuralpay_gateway import GatewayConfig, GeminiProvider, TaskRouter


async def main():
    router = TaskRouter(GeminiProvider(GatewayConfig(api_key=os.environ.get("API_KEY"))))

    result = await router.dispatch(
        {"task": "data-analysis", "payload": {"description": "Wöchentliche Besucherzahlen eines Museums"}}
    )
    if result.status_code != 200:
        print(f"Error: {result.body}")
        return

    analysis = result.body
    print(analysis["title"])
    print(analysis["summary"])
    print("\nSchlüsselerkenntnisse:")
    for item in analysis["key_insights"]:
        print(f"  - {item}")
    print("\nHandlungsempfehlungen:")
    for item in analysis["recommendations"]:
        print(f"  - {item}")


if __name__ == "__main__":
    asyncio.run(main())

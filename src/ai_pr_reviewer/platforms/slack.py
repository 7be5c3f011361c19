import httpx


class SlackNotifier:
    """Posts plain-text messages to a Slack incoming webhook."""

    def __init__(self, webhook_url: str):
        self.webhook_url = webhook_url

    async def post_message(self, text: str) -> None:
        async with httpx.AsyncClient() as client:
            response = await client.post(
                self.webhook_url,
                json={"text": text},
                timeout=30.0,
            )
            response.raise_for_status()

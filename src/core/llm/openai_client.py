from openai import AsyncOpenAI


class OpenAIClient:
    def __init__(self, api_key: str, model: str = "gpt-4o-mini"):
        self.client = AsyncOpenAI(
            api_key=api_key,
            timeout=120.0,
        )
        self.model = model

    async def generate(self, prompt: str, system: str | None = None, max_tokens: int = 150) -> str:
        messages = []
        if system:
            messages.append({"role": "system", "content": system})
        messages.append({"role": "user", "content": prompt})

        response = await self.client.chat.completions.create(
            model=self.model,
            messages=messages,
            temperature=0.3,
            max_tokens=max_tokens,
        )
        if not response.choices:
            raise ValueError("No response from OpenAI API")
        return response.choices[0].message.content or ""

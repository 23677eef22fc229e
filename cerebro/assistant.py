import requests
from typing import List
import json
import logging
import statsd
from cerebro import config
from cerebro.prompts import SYSTEM_PROMPT

log = logging.getLogger(__name__)

class CompletionServiceError(Exception):
    def __init__(self, status_code: int, body: str = ""):
        super().__init__(f"completion service responded with {status_code}")
        self.status_code = status_code
        self.body = body

class LLMAssistant:
    def __init__(self, metrics: statsd.StatsClient, model: str = config.ANTHROPIC_MODEL, system_prompt: str = SYSTEM_PROMPT, max_tokens: int = config.MAX_TOKENS):
        self.metrics = metrics
        self.model_version = model
        self.system_prompt = system_prompt
        self.max_tokens = max_tokens

    def build_request_body(self, messages: List) -> dict:
        return {
            "model": self.model_version,
            "max_tokens": self.max_tokens,
            "system": self.system_prompt,
            "messages": messages,
        }

    # this method should be overriden in the implementation
    def get_completion(self, messages: List) -> str:
        return ""

class AnthropicAssistant(LLMAssistant):
    def __init__(
        self,
        metrics: statsd.StatsClient,
        api_key: str = config.ANTHROPIC_API_KEY,
        model: str = config.ANTHROPIC_MODEL,
        api_url: str = config.ANTHROPIC_URL,
        timeout: float = config.ANTHROPIC_TIMEOUT,
    ):
        super().__init__(metrics=metrics, model=model)
        self.api_key = api_key
        self.api_url = api_url
        self.timeout = timeout

    def get_completion(self, messages: List) -> str:
        response = requests.post(
            self.api_url,
            headers={
                "content-type": "application/json",
                "x-api-key": self.api_key or "",
                "anthropic-version": config.ANTHROPIC_VERSION,
            },
            data=json.dumps(self.build_request_body(messages)),
            timeout=self.timeout,
        )

        if not response.ok:
            self.metrics.incr("errors.generate_response")
            raise CompletionServiceError(response.status_code, response.text)

        # the reply is a list of content blocks, only the first one is shown to the user
        data = response.json()
        content = data.get("content") if isinstance(data, dict) else None
        first_block = content[0] if isinstance(content, list) and content else {}
        reply = first_block.get("text") if isinstance(first_block, dict) else None

        self.metrics.incr("success.generate_response")
        return reply or ""

"""OpenAI-compatible chat completion backend.

Works with any endpoint that speaks the OpenAI chat API (OpenAI, Groq,
Mistral, local servers). See palette_tool.core.env for provider settings.
"""

import openai

from palette_tool.core.env import ProviderConfig
from palette_tool.core.errors import UpstreamUnavailable
from palette_tool.core.types import GenerationRequest


def _client(config: ProviderConfig) -> openai.OpenAI:
    return openai.OpenAI(api_key=config.api_key, base_url=config.api_url)


def complete(request: GenerationRequest, config: ProviderConfig) -> str:
    """Send one request, return the raw text of the first choice.

    Any SDK failure (network, auth, rate limit, bad status) is raised as
    UpstreamUnavailable. The call is not retried.
    """
    kwargs = {}
    if request.json_output:
        kwargs['response_format'] = {'type': 'json_object'}

    client = _client(config)
    try:
        response = client.chat.completions.create(
            model=config.model,
            messages=request.messages(),
            temperature=request.temperature,
            **kwargs,
        )
    except openai.OpenAIError as e:
        raise UpstreamUnavailable('Failed to generate palette') from e

    if not response.choices:
        return ''
    return response.choices[0].message.content or ''


def completer(config: ProviderConfig):
    """Bind a provider config, giving the callable shape the pipeline expects."""

    def _complete(request: GenerationRequest) -> str:
        return complete(request, config)

    return _complete

"""
AI-assisted event copy

LLMCopywriter talks to any OpenAI-compatible chat completions endpoint and is
enabled by LLM_API_KEY. Without a key, FallbackCopywriter is used: it cannot
rewrite descriptions, but it still produces promo ideas by recombining the
event's own name, date and location.
"""

import json
import logging
import os
import re

from openai import OpenAI, OpenAIError

from scene.errors import DependencyUnavailable, GatewayFailure

logger = logging.getLogger(__name__)

DEFAULT_MODEL = 'gpt-4o-mini'


def _strip_code_fences(text):
    if not text:
        return ""
    fenced = re.match(r"^\s*```[a-zA-Z0-9_-]*\s*([\s\S]*?)\s*```\s*$", text)
    if fenced:
        return fenced.group(1).strip()
    return text.strip()


def _parse_promo_ideas(text):
    """Parse the model's JSON array of promo ideas, tolerating fences and surrounding prose"""
    cleaned = _strip_code_fences(text)
    candidates = [cleaned]
    start, end = cleaned.find('['), cleaned.rfind(']')
    if start != -1 and end > start:
        candidates.append(cleaned[start:end + 1])

    for candidate in candidates:
        try:
            ideas = json.loads(candidate)
        except json.JSONDecodeError:
            continue
        if isinstance(ideas, list):
            return [
                {
                    'variant': idea.get('variant', index),
                    'text': str(idea.get('text', '')),
                    'tagline': str(idea.get('tagline', '')),
                }
                for index, idea in enumerate(ideas, start=1)
                if isinstance(idea, dict)
            ]
    raise ValueError(f"Could not parse promo ideas from model output: {text[:200]!r}")


def fallback_promo_ideas(event_name, date_time=None, location=None, is_paid=False, ticket_price=None):
    """Three promo variants built from the event's own details"""
    event_name = event_name or ''
    headline = event_name.split(':')[0] or event_name[:30]
    return [
        {'variant': 1, 'text': event_name, 'tagline': date_time},
        {'variant': 2, 'text': headline, 'tagline': location},
        {'variant': 3, 'text': 'Join Us', 'tagline': f'${ticket_price}' if is_paid else 'Free Event'},
    ]


class LLMCopywriter:
    """Generates event copy with a chat completions model"""
    enabled = True

    def __init__(self, api_key, base_url=None, model_name=None):
        self.model_name = model_name or DEFAULT_MODEL
        self.client = OpenAI(api_key=api_key, base_url=base_url)

    def _complete(self, prompt, max_tokens):
        logger.info(f"Issuing copy request to model {self.model_name}")
        try:
            response = self.client.chat.completions.create(
                model=self.model_name,
                max_tokens=max_tokens,
                messages=[{'role': 'user', 'content': prompt}],
            )
        except OpenAIError as e:
            logger.error(f"Text generation request to {self.model_name} failed: {e}")
            raise GatewayFailure('AI generation failed')

        if not response.choices:
            logger.error(f"Received 0 choices from {self.model_name}")
            raise GatewayFailure('AI generation returned no output')
        return (response.choices[0].message.content or '').strip()

    def enhance_description(self, event_name, description):
        prompt = (
            "You are helping improve an event description. Make it more compelling, engaging, "
            "and professional while keeping the core message. "
            f'Event name: "{event_name}". Current description: "{description}". '
            "Return only the improved description, no preamble."
        )
        return self._complete(prompt, max_tokens=1000)

    def generate_promo_ideas(self, event_name, description=None, date_time=None, location=None,
                             is_paid=False, ticket_price=None):
        prompt = (
            "Generate 3 different promotional text variations for this event. Each should be concise "
            "(under 30 words) and suitable for social media. "
            f'Event: "{event_name}", Description: "{description}", Date: "{date_time}", Location: "{location}". '
            'Return as JSON array with format: [{"variant": 1, "text": "...headline", "tagline": "...subtext"}]'
        )
        text = self._complete(prompt, max_tokens=1500)
        try:
            return _parse_promo_ideas(text)
        except ValueError as e:
            logger.error(str(e))
            raise GatewayFailure('Promo generation failed')


class FallbackCopywriter:
    enabled = False

    def enhance_description(self, event_name, description):
        raise DependencyUnavailable('AI features not available: add LLM_API_KEY to .env to enable AI features')

    def generate_promo_ideas(self, event_name, description=None, date_time=None, location=None,
                             is_paid=False, ticket_price=None):
        return fallback_promo_ideas(event_name, date_time, location, is_paid, ticket_price)


def build_copywriter(api_key=None):
    """Pick the copywriter variant from configuration"""
    api_key = api_key or os.getenv('LLM_API_KEY')
    if api_key:
        return LLMCopywriter(
            api_key=api_key,
            base_url=os.getenv('LLM_BASE_URL') or None,
            model_name=os.getenv('LLM_MODEL'),
        )
    return FallbackCopywriter()

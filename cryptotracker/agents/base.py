"""Base utilities for AI agents.

This module provides common utilities for creating and running AI agents
using the OpenAI Agents SDK.
"""

import logging
import os
from typing import Any, AsyncIterator, Optional

# Disable tracing to avoid noisy 503 errors from telemetry
os.environ.setdefault("OPENAI_AGENTS_DISABLE_TRACING", "1")

from agents import Agent, ModelSettings, Runner
from openai.types.responses import ResponseTextDeltaEvent


# Default model to use for agents
DEFAULT_MODEL = "gpt-4o"

logger = logging.getLogger(__name__)


class AnalysisError(Exception):
    """Raised when an agent run cannot produce an answer."""


def get_model() -> str:
    """Get the model to use for agents.
    
    Checks OPENAI_MODEL environment variable, falls back to default.
    
    Returns:
        Model name string.
    """
    return os.environ.get("OPENAI_MODEL", DEFAULT_MODEL)


def create_agent(
    name: str,
    instructions: str,
    tools: Optional[list[Any]] = None,
    model: Optional[str] = None,
    max_tokens: Optional[int] = None,
) -> Agent:
    """Create an AI agent with the specified configuration.
    
    Args:
        name: Name of the agent.
        instructions: System instructions for the agent.
        tools: Optional list of tools the agent can use.
        model: Optional model override. Uses default if not specified.
        max_tokens: Optional cap on tokens per model response.
        
    Returns:
        Configured Agent instance.
    """
    agent_model = model or get_model()
    
    return Agent(
        name=name,
        instructions=instructions,
        tools=tools or [],
        model=agent_model,
        model_settings=ModelSettings(max_tokens=max_tokens),
    )


def _log_agent_call(agent: Agent) -> None:
    logger.info("Agent: %s | Model: %s", agent.name, agent.model)


async def stream_agent_text(
    agent: Agent,
    message: str,
    context: Optional[dict[str, Any]] = None,
    max_turns: int = 8,
) -> AsyncIterator[str]:
    """Run an agent and yield its text output as it is generated.
    
    Args:
        agent: The agent to run.
        message: User message to send to the agent.
        context: Optional context dictionary to pass to the agent.
        max_turns: Maximum agent loop iterations.
        
    Yields:
        Text deltas in generation order. Tool calls and other events
        are skipped.
    """
    _log_agent_call(agent)
    result = Runner.run_streamed(agent, message, context=context, max_turns=max_turns)
    async for event in result.stream_events():
        if event.type == "raw_response_event" and isinstance(event.data, ResponseTextDeltaEvent):
            yield event.data.delta


async def collect_text(chunks: AsyncIterator[str]) -> str:
    """Join streamed text chunks into one string."""
    text = ""
    async for chunk in chunks:
        text += chunk
    return text


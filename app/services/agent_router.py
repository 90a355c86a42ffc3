from typing import Optional

from app.services.agent_registry import AGENTS, DEFAULT_AGENT, AgentId, get_agent

COMMON_PROMPT = (
    "You are an ODIA.dev Nigerian voice AI agent. Be clear, direct, realistic. "
    "Use Nigerian English or light Pidgin when helpful. "
    "Respect Lagos timezone, be concise, avoid fluff."
)


def select_agent(message: Optional[str]) -> AgentId:
    """Pick the first agent (in registry order) with a keyword inside the message.

    Matching is plain substring on the lowercased text, so short keywords can
    fire inside longer words. Falls back to DEFAULT_AGENT.
    """
    normalized = (message or "").lower()
    for agent in AGENTS:
        if any(keyword in normalized for keyword in agent.keywords):
            return agent.agent_id
    return DEFAULT_AGENT


def build_prompt(agent_id) -> str:
    agent = get_agent(agent_id)
    if agent is None:
        return COMMON_PROMPT
    return f"{COMMON_PROMPT}\n{agent.prompt}"

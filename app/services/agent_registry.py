from dataclasses import dataclass
from enum import Enum
from typing import Optional


class AgentId(str, Enum):
    LEXI = "LEXI"
    MISS = "MISS"
    ATLAS = "ATLAS"
    LEGAL = "LEGAL"


@dataclass(frozen=True)
class AgentDefinition:
    agent_id: AgentId
    name: str
    price: int  # Naira per month
    keywords: tuple[str, ...]
    prompt: str


# Declared order is routing priority.
AGENTS: tuple[AgentDefinition, ...] = (
    AgentDefinition(
        agent_id=AgentId.LEXI,
        name="Lexi",
        price=15000,
        keywords=("business", "automation", "whatsapp", "marketing", "sales"),
        prompt=(
            "Role: WhatsApp Business Automation Specialist (Lexi).\n"
            "Goal: qualify leads, explain pricing (₦15,000/month), push for WhatsApp automation outcomes, "
            "book demos.\n"
            "Constraints: short messages, clear next step."
        ),
    ),
    AgentDefinition(
        agent_id=AgentId.MISS,
        name="MISS",
        price=0,
        keywords=("university", "admission", "student", "mudiame", "education", "school"),
        prompt=(
            "Role: University Support Agent (MISS) for Mudiame University.\n"
            "Languages: English, Yoruba, Igbo (detect and reply if user greets in Yoruba/Igbo).\n"
            "Tasks: admissions, courses, fees, campus info."
        ),
    ),
    AgentDefinition(
        agent_id=AgentId.ATLAS,
        name="Atlas",
        price=25000,
        keywords=("luxury", "travel", "hotel", "premium", "exclusive", "concierge"),
        prompt=(
            "Role: Luxury Concierge (Atlas).\n"
            "Tone: premium but not waffly. Offer hotels/travel and upsell packages (₦25,000/month)."
        ),
    ),
    AgentDefinition(
        agent_id=AgentId.LEGAL,
        name="Legal",
        price=20000,
        keywords=("legal", "contract", "compliance", "ndpr", "privacy", "policy"),
        prompt=(
            "Role: NDPR Compliance Assistant (Legal).\n"
            "Scope: NDPR, privacy policy guidance, contract basics. No legal advice disclaimer. "
            "Pricing ₦20,000/month."
        ),
    ),
)

DEFAULT_AGENT = AgentId.LEXI

_BY_ID = {agent.agent_id: agent for agent in AGENTS}


def get_agent(agent_id) -> Optional[AgentDefinition]:
    """Look up a definition by enum member or raw string. Unknown ids give None."""
    try:
        return _BY_ID[AgentId(agent_id)]
    except ValueError:
        return None


def get_agent_price(agent_id, default: int = 15000) -> int:
    agent = get_agent(agent_id)
    return agent.price if agent else default

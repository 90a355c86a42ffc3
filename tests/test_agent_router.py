import pytest

from app.services.agent_registry import AGENTS, DEFAULT_AGENT, AgentId, get_agent, get_agent_price
from app.services.agent_router import COMMON_PROMPT, build_prompt, select_agent


class TestAgentRegistry:
    def test_registry_order_is_fixed(self):
        assert [agent.agent_id for agent in AGENTS] == [AgentId.LEXI, AgentId.MISS, AgentId.ATLAS, AgentId.LEGAL]

    def test_default_is_lexi(self):
        assert DEFAULT_AGENT == AgentId.LEXI

    def test_prices(self):
        assert get_agent_price("LEXI") == 15000
        assert get_agent_price("MISS") == 0
        assert get_agent_price("ATLAS") == 25000
        assert get_agent_price("LEGAL") == 20000

    def test_unknown_plan_price_falls_back(self):
        assert get_agent_price("GOLD") == 15000

    def test_get_agent_accepts_string_and_enum(self):
        assert get_agent("ATLAS") is get_agent(AgentId.ATLAS)
        assert get_agent("atlas") is None

    def test_definitions_are_immutable(self):
        with pytest.raises(Exception):
            AGENTS[0].price = 1


class TestSelectAgent:
    @pytest.mark.parametrize(
        "message,expected",
        [
            ("How much is your marketing package?", AgentId.LEXI),
            ("When does admission open?", AgentId.MISS),
            ("Book me a HOTEL in Abuja", AgentId.ATLAS),
            ("Is my app NDPR ready?", AgentId.LEGAL),
        ],
    )
    def test_single_agent_keyword(self, message, expected):
        assert select_agent(message) == expected

    def test_no_keyword_returns_default(self):
        assert select_agent("good morning o") == DEFAULT_AGENT

    def test_empty_and_none_return_default(self):
        assert select_agent("") == DEFAULT_AGENT
        assert select_agent(None) == DEFAULT_AGENT

    def test_two_agents_resolve_by_registry_order(self):
        # ATLAS (travel) and LEGAL (contract); ATLAS is declared first.
        assert select_agent("contract for my travel agency") == AgentId.ATLAS
        assert select_agent("travel contract") == select_agent("contract travel")

    def test_lexi_beats_miss(self):
        assert select_agent("school sales") == AgentId.LEXI

    def test_substring_match_inside_longer_word(self):
        assert select_agent("hotelier") == AgentId.ATLAS

    def test_whatsapp_automation_scenario(self):
        assert select_agent("I need WhatsApp automation for my business") == AgentId.LEXI


class TestBuildPrompt:
    def test_prompt_has_common_block_and_role(self):
        prompt = build_prompt(AgentId.LEXI)
        assert prompt.startswith(COMMON_PROMPT)
        assert "Lexi" in prompt
        assert "₦15,000/month" in prompt

    def test_each_agent_has_its_own_block(self):
        assert "Mudiame University" in build_prompt("MISS")
        assert "₦25,000/month" in build_prompt("ATLAS")
        assert "₦20,000/month" in build_prompt("LEGAL")

    def test_unknown_agent_gets_common_block(self):
        assert build_prompt("UNKNOWN") == COMMON_PROMPT

    def test_prompt_is_pure(self):
        assert build_prompt("LEGAL") == build_prompt("LEGAL")

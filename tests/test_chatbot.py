import pytest

from smartsaver.chatbot import FALLBACK, GREETING, HELP, NO_DATA, NOT_ENOUGH, ChatBot
from smartsaver.profiles import ELECTRICITY_PROFILE, WATER_PROFILE
from smartsaver.stats import AllDatasetsStats, summarize


@pytest.fixture
def water_bot(water_dataset):
    stats = AllDatasetsStats(dataset_count=3, total_average=400.0, daily_average=110.0)
    return ChatBot("water", summarize(water_dataset.analysis, WATER_PROFILE), stats)


@pytest.fixture
def electricity_bot(electricity_dataset):
    return ChatBot("electricity", summarize(electricity_dataset.analysis, ELECTRICITY_PROFILE))


def test_no_summary():
    assert ChatBot("water").answer("total water") == NO_DATA


def test_water_rules(water_bot):
    assert water_bot.answer("What is my TOTAL WATER?") == "Total Water: 500.00 L"
    assert water_bot.answer("daily average please") == "Daily Average: 125.00 L"
    assert water_bot.answer("peak day?") == "Peak Usage Day: 02-03-2024"
    assert water_bot.answer("how much shower") == "Shower usage: 220.00 L"
    assert water_bot.answer("washing machine") == "Washing Machine usage: 110.00 L"
    assert water_bot.answer("most intensive") == "Most Water-Intensive Appliance: Shower (220.00 L)"
    assert water_bot.answer("usage status") == "Usage Status: Low"


def test_first_matching_rule_wins(water_bot):
    # "daily average" is checked before the shower rule
    assert water_bot.answer("daily average of my shower").startswith("Daily Average")


def test_tips(water_bot):
    reply = water_bot.answer("how can I save?")
    assert reply.startswith("💡 Water Saving Tips:\n- ")
    assert WATER_PROFILE.tips[0] in reply


def test_dataset_comparison(water_bot, electricity_bot):
    reply = water_bot.answer("compare datasets")
    assert "Total Usage vs Average: 500.00 L vs 400.00 L" in reply
    assert electricity_bot.answer("dataset comparison") == NOT_ENOUGH


def test_electricity_rules(electricity_bot):
    assert electricity_bot.answer("total electricity") == "Total Electricity: 30.00 kWh"
    assert electricity_bot.answer("lights?") == "Lights usage: 3.00 kWh"
    assert electricity_bot.answer("most energy") == "Most Energy-Intensive Appliance: Heater (15.00 kWh)"
    assert electricity_bot.answer("usage status") == "Usage Status: Average"


def test_utility_specific_keywords(water_bot):
    # "light" is only an electricity rule
    assert water_bot.answer("light") == FALLBACK


def test_help_and_fallback(water_bot):
    assert water_bot.answer("help") == HELP
    assert water_bot.answer("what can you do") == HELP
    assert water_bot.answer("gibberish") == FALLBACK


def test_send_keeps_history(water_bot):
    assert water_bot.messages[0].content == GREETING
    assert water_bot.send("   ") is None
    water_bot.send("total water")
    assert [m.role for m in water_bot.messages] == ["assistant", "user", "assistant"]
    assert water_bot.messages[-1].content == "Total Water: 500.00 L"


def test_unknown_utility():
    with pytest.raises(ValueError):
        ChatBot("gas")

"""SmartSaver assistant: keyword rules over the current Summary."""

from dataclasses import dataclass

from .profiles import WATER, get_profile
from .stats import AllDatasetsStats, Summary
from .status import usage_status

GREETING = ("Hi! 👋 I'm your SmartSaver assistant. I can help you analyze your water "
            "and electricity usage. What would you like to know?")
NO_DATA = "No data loaded. Please select or upload a dataset."
NOT_ENOUGH = "Not enough datasets available for comparison. Please upload more datasets."
HELP = ("I can help you with:\n- Total usage\n- Daily average\n- Peak usage day\n"
        "- Appliance usage breakdown\n- Most intensive appliance\n- Usage status\n"
        "- Saving tips\n- Dataset comparison")
FALLBACK = ("Sorry, I didn't understand. Try asking about total, average, peak, appliance "
            "usage, most intensive appliance, usage status, tips, or dataset comparison.")
HELP_KEYWORDS = ("help", "what can you do", "summary")

# (keyword, appliance kind) in matching order
APPLIANCE_KEYWORDS = {
    "water": [("shower", "shower"), ("washing machine", "washing"), ("sink", "sink"),
              ("toilet", "toilet"), ("dishwasher", "dishwasher")],
    "electricity": [("fan", "fan"), ("heater", "heater"), ("refrigerator", "refrigerator"),
                    ("washing machine", "washing"), ("light", "lights")],
}


@dataclass
class ChatMessage:
    role: str      # "assistant" | "user"
    content: str


def _qty(value: float, unit: str) -> str:
    return f"{value:.2f} {unit}"


class ChatBot:
    def __init__(self, utility: str, summary: Summary | None = None,
                 stats: AllDatasetsStats | None = None):
        self.profile = get_profile(utility)
        self.summary = summary
        self.stats = stats
        self.messages: list[ChatMessage] = [ChatMessage("assistant", GREETING)]

    # ---- rules ----
    def _rules(self):
        """Ordered (keywords, reply) pairs; replies are evaluated lazily."""
        s, p = self.summary, self.profile
        word = "Water" if p.utility == WATER else "Electricity"
        rules = [
            ((f"total {p.utility}",), lambda: f"Total {word}: {_qty(s.total, p.unit)}"),
            (("daily average",), lambda: f"Daily Average: {_qty(s.average, p.unit)}"),
            (("peak usage day", "peak day"), lambda: f"Peak Usage Day: {s.peak_day}"),
        ]
        for keyword, kind in APPLIANCE_KEYWORDS[p.utility]:
            rules.append(((keyword,), self._appliance_reply(kind)))
        most = "most water" if p.utility == WATER else "most energy"
        rules += [
            ((most, "most intensive"), self._most_intensive),
            (("usage status",), lambda: f"Usage Status: {usage_status(s, p)}"),
            (("tip", "save", "reduce"),
             lambda: f"💡 {word} Saving Tips:\n- " + "\n- ".join(p.tips)),
            (("dataset comparison", "compare datasets"), self._comparison),
        ]
        return rules

    def _appliance_reply(self, kind: str):
        def reply():
            a = self.summary.appliance(kind)
            return f"{a.name} usage: {_qty(a.total, self.profile.unit)}"
        return reply

    def _most_intensive(self) -> str:
        a = self.summary.most_intensive()
        label = "Water" if self.profile.utility == WATER else "Energy"
        return f"Most {label}-Intensive Appliance: {a.name} ({_qty(a.total, self.profile.unit)})"

    def _comparison(self) -> str:
        stats = self.stats
        if stats is None or stats.dataset_count < 2:
            return NOT_ENOUGH
        u = self.profile.unit
        return ("Dataset Comparison:\n"
                f"- Total Usage vs Average: {_qty(self.summary.total, u)} vs {_qty(stats.total_average, u)}\n"
                f"- Daily Usage vs Average: {_qty(self.summary.average, u)} vs {_qty(stats.daily_average, u)}")

    # ---- public ----
    def answer(self, query: str) -> str:
        if self.summary is None:
            return NO_DATA
        q = (query or "").lower()
        for keywords, reply in self._rules():
            if any(k in q for k in keywords):
                return reply()
        if any(k in q for k in HELP_KEYWORDS):
            return HELP
        return FALLBACK

    def send(self, text: str) -> str | None:
        """Append the user message and the reply; blank input is ignored."""
        if not text or not text.strip():
            return None
        self.messages.append(ChatMessage("user", text))
        reply = self.answer(text)
        self.messages.append(ChatMessage("assistant", reply))
        return reply

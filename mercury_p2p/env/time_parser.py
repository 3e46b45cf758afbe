import re
from datetime import timedelta


class TimeParser:
    def __init__(self, time_amount: str) -> None:
        self._units = {
            "s": "seconds",
            "m": "minutes",
            "h": "hours",
            "d": "days",
            "w": "weeks",
        }

        self._amount_pattern = re.compile(
            r"(?P<val>\d+(\.\d+)?)(?P<unit>[smhdw]?)",
            flags=re.I,
        )

        self.time = self.parse(time_amount)

    def parse(self, time_amount: str):
        time_amount = time_amount.strip()

        # every character must belong to a <number><unit> pair
        if not re.fullmatch(r"(\d+(\.\d+)?[smhdw]?)+", time_amount, flags=re.I):
            raise ValueError(
                f"Err. - {time_amount!r} is not a duration like 0.25s, 1m or 1m30s"
            )

        amounts: dict[str, float] = {}
        for match in self._amount_pattern.finditer(time_amount):
            unit = self._units.get(match.group("unit").lower(), "seconds")
            amounts[unit] = amounts.get(unit, 0.0) + float(match.group("val"))

        return float(timedelta(**amounts).total_seconds())

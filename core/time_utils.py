from datetime import date, datetime, timedelta


def today() -> date:
    return date.today()


def parse_date(value) -> date | None:
    """Accept a date, a datetime or an ISO string (YYYY-MM-DD)."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value).strip())


def week_dates(day: date) -> list[date]:
    """Seven dates of the week containing `day`, starting on Sunday."""
    # date.weekday(): Monday == 0 ... Sunday == 6
    start = day - timedelta(days=(day.weekday() + 1) % 7)
    return [start + timedelta(days=i) for i in range(7)]


def month_key(day: date) -> str:
    return f"{day.year:04d}-{day.month:02d}"

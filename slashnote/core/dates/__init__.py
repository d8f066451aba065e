"""Due date parsing for the /due command."""

from slashnote.core.dates.parser import DateParser, parse_due_date

__all__ = ["DateParser", "parse_due_date"]

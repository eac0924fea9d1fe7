"""
vonage_client/utils/json_naming_converter.py

WHAT THIS FILE IS FOR
---------------------
Key-naming helpers for the parts of the Vonage API that speak camelCase
(the Voice NCCO document, Voice endpoints, speech / DTMF settings).

Python code in this library uses snake_case attribute names everywhere;
these helpers are plugged into pydantic as an `alias_generator`, so the
wire names are derived instead of being typed out field by field.

    end_on_silence  -> endOnSilence
    event_url       -> eventUrl
    text            -> text

WHAT THIS FILE IS NOT FOR
-------------------------
- It does not touch values, only names
- It does not know about any particular schema
- Families whose wire format is snake_case (messages, conversations,
  subaccounts, proactive connect) do not use it
"""

from __future__ import annotations


def snake_to_camel(s: str) -> str:
    """
    Convert a snake_case name to camelCase.

    Leading / trailing underscores are kept; names without '_' are returned unchanged.
    """
    core = s.strip("_")
    if "_" not in core:
        return s

    leading = s[: len(s) - len(s.lstrip("_"))]
    trailing = s[len(s.rstrip("_")):]
    head, *tail = [p for p in core.split("_") if p]
    return leading + head + "".join(p[:1].upper() + p[1:] for p in tail) + trailing


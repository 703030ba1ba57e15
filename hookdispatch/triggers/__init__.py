"""Trigger precedence and execution."""

from .policy import TriggerDecision, TriggerPolicy, decide
from .push_trigger import PushTrigger

__all__ = ["TriggerDecision", "TriggerPolicy", "decide", "PushTrigger"]

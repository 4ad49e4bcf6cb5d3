"""Polling client that exercises the mock auth server's echo route."""

from .poller import EchoPoller, PollerState, PollOutcome, decode_resource

__all__ = ["EchoPoller", "PollerState", "PollOutcome", "decode_resource"]

"""Chatter Gateway: multi-provider chat gateway with per-user persistence."""

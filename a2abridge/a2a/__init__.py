"""A2A (Agent-to-Agent) protocol client side of the bridge.

Fetches agent cards from remote peers, keeps one connection per peer,
and exchanges messages and tasks with them over JSON-RPC.
"""

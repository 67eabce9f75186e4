"""Miniature telephony network: call-signaling state machines and their router.

Participants never talk to each other directly. Every request goes through a
`SignalingBackend` (the in-process `Network` here), which can be swapped for a
real transport without touching the participant logic.
"""

"""
Dronewars - Targeting and Selection Engine

A deterministic rules engine for the Drone Wars card game.
Given a read-only snapshot of both boards it provides:
- Legal targets for cards, abilities and additional costs
- Lane control and card playability checks
- Secondary targeting for two-target cards
- Selection state machines for card play and drone movement
"""

__version__ = "0.1.0"

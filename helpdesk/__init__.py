"""
Mesa de Ayuda IT

IT help-desk ticketing backend with:
- Username login over a seeded directory (user / agent / admin)
- Ticket lifecycle with an append-only history
- Per-ticket comment threads
- Admin dashboard counters
"""

__version__ = "0.1.0"

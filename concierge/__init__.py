"""
Concierge — Single-Channel Utility Bot for Discord
===================================================
Watches one channel in one guild and answers a handful of ``!`` commands:
help, dice rolls, and role listing.  Users and roles come from flat files
loaded once at start-up.

Package layout::

    concierge/
    ├── config.py          # YAML → typed Python config
    ├── constants.py       # Trigger character, data-file names
    ├── errors.py          # LoadError, RollError, UnsupportedOperation
    ├── data/
    │   ├── roster.py      # Flat-file roster parsing
    │   └── runtime.py     # Immutable start-up context
    ├── engine/
    │   ├── dispatcher.py  # Command base class, parser, router
    │   ├── commands.py    # help, roll, listmyroles, addrole, removerole, listroles
    │   ├── dice.py        # NdM roller
    │   ├── roles.py       # Role reporter + self-service placeholders
    │   └── usage.py       # Usage catalog
    └── bot/
        ├── core.py        # Bot subclass, cog loader, send_text
        ├── gateway.py     # Echo / channel gates → dispatcher → reply
        └── cogs/
            └── channel.py # on_message capture
"""

__version__ = "0.1.0"

"""MFBot Linux installer (Python-first, state-driven).

Installs the MFBot console binary, the .NET runtime it needs and the
Python web interface, then writes config, launcher scripts, systemd units
and a docker-compose file under /opt/mfbot.
"""

__all__ = []

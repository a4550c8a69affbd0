"""
Core infrastructure package for svox-batch.

Modules:
- config   : Environment-derived configuration model.
- errors   : Exception types raised by the driver and the session adapter.
- logging  : Lightweight console/file logging helpers.
- models   : Pydantic models for per-file outcomes and run reports.
- paths    : Source file discovery and output path derivation.
- proc     : Reachability probe for the playground entry point.
- storage  : Filesystem utilities (CRLF text write, atomic JSON write, base64).
- wait     : Polling wait with an injectable clock.
"""

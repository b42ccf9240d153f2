"""Sevens host: game engine, turn coordinator and network server."""

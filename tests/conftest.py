"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import pytest


@pytest.fixture
def gif_descriptor_bytes() -> bytes:
    """Packed GIF logical screen descriptor: 3x5, color table info 0xF7."""
    return bytes([0x03, 0x00, 0x05, 0x00, 0xF7, 0x00, 0x00])


@pytest.fixture
def nested_record_bytes() -> bytes:
    """Packed 15-byte nested record with a big-endian inner struct."""
    return bytes(
        [0x00, 0x11, 0x22, 0x33, 0x44, 0x44, 0x55, 0x66, 0x77, 0x88, 0x99, 0xAA, 0xBB, 0xCC, 0xDD]
    )

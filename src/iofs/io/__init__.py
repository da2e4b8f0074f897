"""Console input/output and typed buffer conversion."""

from iofs.io.console import Console
from iofs.io.convert import convert_buffer
from iofs.io.number import NumberSystem

__all__ = ["Console", "NumberSystem", "convert_buffer"]

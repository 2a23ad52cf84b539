"""
Error kinds raised while tiling images.
"""


class TilerError(Exception):
	"""
	Base error; carries the offending file path when one is known.
	"""

	def __init__(self, message: str, path: str | None = None) -> None:
		super().__init__(message)
		self.message = message
		self.path = path

	def __str__(self) -> str:
		if self.path:
			return f"{self.path}: {self.message}"
		return self.message


class ConfigError(TilerError, ValueError):
	pass


class GeometryError(ConfigError):
	pass


class InputError(TilerError):
	pass


class DecodeError(TilerError):
	pass


class OutputError(TilerError):
	pass


class PageCancelled(TilerError):
	pass

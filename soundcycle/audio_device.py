from dataclasses import dataclass


@dataclass(eq=False)
class AudioDevice:
    """
    An audio output device as reported by a device backend.

    Two devices are equal when their ids match. The friendly name stands in
    for the id when a backend could not provide one.
    """
    id: str
    friendly_name: str
    is_default: bool = False

    def _identity(self):
        return self.id if self.id else self.friendly_name

    def __eq__(self, other):
        if not isinstance(other, AudioDevice):
            return NotImplemented
        return self._identity() == other._identity()

    def __hash__(self):
        return hash(self._identity())

    def __str__(self):
        return self.friendly_name

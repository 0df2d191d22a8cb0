from pprint import pformat


class PostedData:
    """Submitted request fields, accessed explicitly by name."""

    def __init__(self, initial_data=None):
        self._data = dict(initial_data or {})

    def get(self, key, default=None):
        return self._data.get(key, default)

    def set(self, key, value):
        self._data[key] = value

    def __getitem__(self, key):
        return self._data[key]

    def __contains__(self, key):
        return key in self._data

    def __iter__(self):
        return iter(self._data)

    def __len__(self):
        return len(self._data)

    def keys(self):
        return self._data.keys()

    def items(self):
        return self._data.items()

    def to_dict(self):
        return dict(self._data)

    def update(self, new_data):
        self._data.update(new_data)

    def __eq__(self, other):
        if isinstance(other, PostedData):
            return self._data == other._data
        if isinstance(other, dict):
            return self._data == other
        return NotImplemented

    def __repr__(self):
        return f"{self.__class__.__name__}({pformat(self._data, indent=2, width=100)})"

from collections.abc import Mapping

from micromodel.exceptions import ConfigurationError, UnknownFieldError


class FieldRegistry(Mapping):
    """Ordered name -> FieldDescriptor mapping owned by one model instance.

    The primary key is the field registered with ``primary_key=True`` or,
    when no field was marked, the first one registered.
    """

    def __init__(self, owner=None):
        self._fields = {}
        self._owner = owner

    def __repr__(self):
        return f"<FieldRegistry [{', '.join(self._fields)}] pk={self._explicit_pk() or 'first'}>"

    def __getitem__(self, name):
        try:
            return self._fields[name]
        except KeyError:
            raise UnknownFieldError(name, self._owner) from None

    def __iter__(self):
        return iter(self._fields)

    def __len__(self):
        return len(self._fields)

    def add(self, descriptor):
        if descriptor.primary_key:
            current = self._explicit_pk()
            if current is not None and current != descriptor.name:
                raise ConfigurationError(
                    f"Primary key already declared as '{current}', cannot also use '{descriptor.name}'"
                )
        self._fields[descriptor.name] = descriptor
        return descriptor

    def _explicit_pk(self):
        for name, descriptor in self._fields.items():
            if descriptor.primary_key:
                return name
        return None

    @property
    def primary_key(self):
        explicit = self._explicit_pk()
        if explicit is not None:
            return explicit
        if not self._fields:
            raise ConfigurationError(f"{self._owner or 'Registry'} has no registered fields")
        return next(iter(self._fields))

    def non_key_items(self):
        pk = self.primary_key
        return [(name, d) for name, d in self._fields.items() if name != pk]

    def value(self, name):
        return self[name].value

    def assign(self, name, raw):
        self[name].assign(raw)

    def reset(self, name):
        self[name].value = None

    def values_by_name(self):
        return {name: d.value for name, d in self._fields.items()}

"""
ctypes structure definitions and metaclass for byte-exact record layouts
"""

import ctypes
import inspect
from typing import Optional, Tuple, Annotated, get_args, get_origin, Any, Dict, List, Protocol

# =============================================================================
# Type Hints
# =============================================================================

class c_array(Protocol):
    """Type hint for ctypes arrays"""
    def __getitem__(self, index: int) -> int: ...
    def __setitem__(self, index: int, value: int) -> None: ...
    def __len__(self) -> int: ...
    def __iter__(self): ...

# =============================================================================
# Metaclass for ctypes structures with annotation support
# =============================================================================

class _CStructMeta(type(ctypes.LittleEndianStructure)):
    """Metaclass building ``_fields_`` and an offset table from annotations

    Annotations are read from the created class rather than the namespace so
    that lazily evaluated annotations resolve the same way as eager ones.
    """

    def __new__(mcs, name, bases, namespace):
        cls = super().__new__(mcs, name, bases, namespace)
        own_annotations = inspect.get_annotations(cls)
        if not own_annotations:
            return cls

        fields = []
        field_annotations = {}  # field_name -> [markers from Annotated]
        field_offsets = {}      # field_name -> (offset, size)
        current_offset = 0

        for field_name, annotation in own_annotations.items():
            if get_origin(annotation) is Annotated:
                args = get_args(annotation)
                ctypes_type = args[1]
                markers = list(args[2:])
                if markers:
                    field_annotations[field_name] = markers
            else:
                ctypes_type = annotation

            field_size = ctypes.sizeof(ctypes_type)
            fields.append((field_name, ctypes_type))
            field_offsets[field_name] = (current_offset, field_size)
            current_offset += field_size

        cls._field_annotations = field_annotations
        cls._field_offsets = field_offsets
        cls._fields_ = fields
        return cls

class c_struct(ctypes.LittleEndianStructure, metaclass=_CStructMeta):
    """Base class for packed ctypes structures declared with annotations"""
    _pack_ = 1
    _layout_ = "ms"

    @classmethod
    def field_offsets(cls) -> Dict[str, Tuple[int, int]]:
        """Return ``{field_name: (offset, size)}`` in declaration order."""
        return dict(cls._field_offsets)  # type: ignore

    @classmethod
    def field_slice(cls, field_name: str) -> slice:
        """Byte range of a field relative to the start of the structure."""
        offset, size = cls._field_offsets[field_name]  # type: ignore
        return slice(offset, offset + size)

    @classmethod
    def get_field_at_offset(cls, offset: int) -> Optional[Tuple[str, int, int]]:
        """Find the field covering ``offset``.

        Returns ``(field_name, field_offset, field_size)`` or None when the
        offset lies outside the structure.
        """
        for field_name, (field_offset, field_size) in cls._field_offsets.items():  # type: ignore
            if field_offset <= offset < field_offset + field_size:
                return (field_name, field_offset, field_size)
        return None

    @classmethod
    def get_field_markers(cls, field_name: str, marker_type: type) -> List[Any]:
        """Get all markers of a specific type for a field."""
        annotations = getattr(cls, '_field_annotations', {}).get(field_name, [])
        return [a for a in annotations if isinstance(a, marker_type)]

    @classmethod
    def get_field_marker(cls, field_name: str, marker_type: type) -> Optional[Any]:
        """Get first marker of a specific type for a field, or None."""
        markers = cls.get_field_markers(field_name, marker_type)
        return markers[0] if markers else None

    @classmethod
    def marker_span(cls, marker_type: type) -> slice:
        """Byte range from the first to the last field carrying ``marker_type``."""
        names = cls.fields_with_marker(marker_type)
        if not names:
            raise KeyError(f"No field of {cls.__name__} carries {marker_type.__name__}")
        return slice(cls.field_slice(names[0]).start, cls.field_slice(names[-1]).stop)

    @classmethod
    def fields_with_marker(cls, marker_type: type) -> List[str]:
        """Names of all fields carrying at least one marker of ``marker_type``."""
        return [
            field_name for field_name in cls._field_offsets  # type: ignore
            if cls.get_field_markers(field_name, marker_type)
        ]

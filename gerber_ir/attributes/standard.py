"""Standard X2 attributes as typed records.

Each record is a frozen dataclass grouped under one of three bases:

* :class:`FileAttribute` -- ``TF`` (``.Part``, ``.FileFunction``, ...)
* :class:`ApertureAttribute` -- ``TA`` (``.AperFunction``, ...)
* :class:`ObjectAttribute` -- ``TO`` (``.N``, ``.P``, ``.C``, ``.Cxxx``)

:func:`to_attribute` lowers any record into the generic
:class:`~gerber_ir.attributes.model.Attribute`, which is what both
placements render.  User-defined attributes skip this module and are
built as plain ``Attribute`` instances.

Enumerated tokens are ``Enum`` members valued by their literal output,
so an unknown token cannot be represented.
"""

from __future__ import annotations

import uuid
from abc import ABC
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum

from gerber_ir.attributes.model import (
    Attribute,
    AttributeKind,
    DecimalField,
    EnumField,
    Field,
    IntegerField,
    StringField,
)
from gerber_ir.errors import GerberError
from gerber_ir.numeric.encoder import Number

# ---------------------------------------------------------------------------
# Shared tokens
# ---------------------------------------------------------------------------


class Position(Enum):
    TOP = "Top"
    BOTTOM = "Bot"


class ExtendedPosition(Enum):
    TOP = "Top"
    INNER = "Inr"
    BOTTOM = "Bot"


# ---------------------------------------------------------------------------
# Base classes
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class FileAttribute(ABC):
    """Base class for standard ``TF`` attributes."""

    pass


@dataclass(frozen=True, slots=True)
class ApertureAttribute(ABC):
    """Base class for standard ``TA`` attributes."""

    pass


@dataclass(frozen=True, slots=True)
class ObjectAttribute(ABC):
    """Base class for standard ``TO`` attributes."""

    pass


StandardAttribute = FileAttribute | ApertureAttribute | ObjectAttribute


def _require(value: object, expected: type | tuple[type, ...], name: str) -> None:
    if isinstance(value, bool) or not isinstance(value, expected):
        raise ValueError(f"{name} has the wrong type, got {value!r}")


# ---------------------------------------------------------------------------
# File attributes
# ---------------------------------------------------------------------------


class PartKind(Enum):
    SINGLE = "Single"
    ARRAY = "Array"
    FABRICATION_PANEL = "FabricationPanel"
    COUPON = "Coupon"
    OTHER = "Other"


@dataclass(frozen=True, slots=True)
class Part(FileAttribute):
    """``.Part`` -- what the file represents.  ``OTHER`` needs a description."""

    kind: PartKind
    description: str | None = None

    def __post_init__(self) -> None:
        _require(self.kind, PartKind, "kind")
        if (self.kind is PartKind.OTHER) != (self.description is not None):
            raise ValueError(
                f"description is required for Part OTHER only, "
                f"got kind={self.kind!r} description={self.description!r}"
            )


class FilePolarityKind(Enum):
    POSITIVE = "Positive"
    NEGATIVE = "Negative"


@dataclass(frozen=True, slots=True)
class FilePolarity(FileAttribute):
    polarity: FilePolarityKind


@dataclass(frozen=True, slots=True)
class SameCoordinates(FileAttribute):
    """``.SameCoordinates`` with an optional name or GUID identifier."""

    ident: str | uuid.UUID | None = None


@dataclass(frozen=True, slots=True)
class CreationDate(FileAttribute):
    """``.CreationDate`` in RFC 3339 form.  The timestamp must be aware."""

    timestamp: datetime

    def __post_init__(self) -> None:
        _require(self.timestamp, datetime, "timestamp")
        if self.timestamp.utcoffset() is None:
            raise ValueError(
                f"timestamp must carry a UTC offset, got {self.timestamp!r}"
            )


@dataclass(frozen=True, slots=True)
class GenerationSoftware(FileAttribute):
    vendor: str
    application: str
    version: str | None = None


@dataclass(frozen=True, slots=True)
class ProjectId(FileAttribute):
    name: str
    guid: uuid.UUID
    revision: str

    def __post_init__(self) -> None:
        _require(self.guid, uuid.UUID, "guid")


@dataclass(frozen=True, slots=True)
class Md5(FileAttribute):
    digest: str


# -- file functions ---------------------------------------------------------


class CopperType(Enum):
    PLANE = "Plane"
    SIGNAL = "Signal"
    MIXED = "Mixed"
    HATCHED = "Hatched"


class PlatedDrillType(Enum):
    PLATED_THROUGH_HOLE = "PTH"
    BLIND = "Blind"
    BURIED = "Buried"


class NonPlatedDrillType(Enum):
    NON_PLATED_THROUGH_HOLE = "NPTH"
    BLIND = "Blind"
    BURIED = "Buried"


class DrillRouteType(Enum):
    DRILL = "Drill"
    ROUTE = "Rout"
    MIXED = "Mixed"


class ProfilePlating(Enum):
    PLATED = "P"
    NON_PLATED = "NP"


class MaskKind(Enum):
    """Layers written as ``<kind>,<Top|Bot>[,<index>]``."""

    SOLDERMASK = "Soldermask"
    LEGEND = "Legend"
    CARBONMASK = "Carbonmask"
    GOLDMASK = "Goldmask"
    HEATSINKMASK = "Heatsinkmask"
    PEELABLEMASK = "Peelablemask"
    SILVERMASK = "Silvermask"
    TINMASK = "Tinmask"


class SidedKind(Enum):
    """Layers written as ``<kind>,<Top|Bot>``."""

    KEEPOUT = "Keepout"
    PASTE = "Paste"
    GLUE = "Glue"
    DEPTHROUT = "Depthrout"
    PADS = "Pads"
    ASSEMBLY_DRAWING = "AssemblyDrawing"


class PlainKind(Enum):
    """Layers written as the bare token."""

    VIAFILL = "Viafill"
    DRILLMAP = "Drillmap"
    FABRICATION_DRAWING = "FabricationDrawing"
    VCUTMAP = "Vcutmap"
    ARRAY_DRAWING = "ArrayDrawing"


class NamedKind(Enum):
    """Layers written as ``<kind>,<free text>``."""

    OTHER = "Other"
    OTHER_DRAWING = "OtherDrawing"


@dataclass(frozen=True, slots=True)
class FileFunction(FileAttribute):
    """Base class for ``.FileFunction`` variants."""

    pass


@dataclass(frozen=True, slots=True)
class CopperLayer(FileFunction):
    """``Copper,L<layer>,<pos>[,<type>]``."""

    layer: int
    position: ExtendedPosition
    copper_type: CopperType | None = None

    def __post_init__(self) -> None:
        _require(self.layer, int, "layer")
        _require(self.position, ExtendedPosition, "position")


@dataclass(frozen=True, slots=True)
class PlatedLayer(FileFunction):
    """``Plated,<from>,<to>,<drill>[,<label>]``."""

    from_layer: int
    to_layer: int
    drill: PlatedDrillType
    label: DrillRouteType | None = None


@dataclass(frozen=True, slots=True)
class NonPlatedLayer(FileFunction):
    """``NonPlated,<from>,<to>,<drill>[,<label>]``."""

    from_layer: int
    to_layer: int
    drill: NonPlatedDrillType
    label: DrillRouteType | None = None


@dataclass(frozen=True, slots=True)
class ProfileLayer(FileFunction):
    """``Profile,P|NP``."""

    plating: ProfilePlating

    def __post_init__(self) -> None:
        _require(self.plating, ProfilePlating, "plating")


@dataclass(frozen=True, slots=True)
class MaskLayer(FileFunction):
    kind: MaskKind
    position: Position
    index: int | None = None

    def __post_init__(self) -> None:
        _require(self.kind, MaskKind, "kind")
        _require(self.position, Position, "position")


@dataclass(frozen=True, slots=True)
class ComponentLayer(FileFunction):
    """``Component,L<layer>,<pos>``."""

    layer: int
    position: Position


@dataclass(frozen=True, slots=True)
class SidedLayer(FileFunction):
    kind: SidedKind
    position: Position

    def __post_init__(self) -> None:
        _require(self.kind, SidedKind, "kind")
        _require(self.position, Position, "position")


@dataclass(frozen=True, slots=True)
class VCutLayer(FileFunction):
    """``Vcut[,<pos>]``."""

    position: Position | None = None


@dataclass(frozen=True, slots=True)
class PlainLayer(FileFunction):
    kind: PlainKind

    def __post_init__(self) -> None:
        _require(self.kind, PlainKind, "kind")


@dataclass(frozen=True, slots=True)
class NamedLayer(FileFunction):
    kind: NamedKind
    value: str

    def __post_init__(self) -> None:
        _require(self.kind, NamedKind, "kind")


# ---------------------------------------------------------------------------
# Aperture attributes
# ---------------------------------------------------------------------------


class ViaProtection(Enum):
    """IPC-4761 via protection type."""

    IA = "Ia"
    IB = "Ib"
    IIA = "IIa"
    IIB = "IIb"
    IIIA = "IIIa"
    IIIB = "IIIb"
    IVA = "IVa"
    IVB = "IVb"
    V = "V"
    VI = "VI"
    VII = "VII"
    NONE = "None"


class PressFit(Enum):
    PRESS_FIT = "PressFit"


class DrillFunction(Enum):
    TOOLING = "Tooling"
    BREAKOUT = "Breakout"
    OTHER = "Other"


class PadDefinition(Enum):
    COPPER_DEFINED = "CuDef"
    SOLDERMASK_DEFINED = "SMDef"


class FiducialScope(Enum):
    LOCAL = "Local"
    GLOBAL = "Global"
    PANEL = "Panel"


class ComponentOutlineKind(Enum):
    BODY = "Body"
    LEAD_TO_LEAD = "Lead2Lead"
    FOOTPRINT = "Footprint"
    COURTYARD = "Courtyard"


class ApertureFunction(Enum):
    VIA_DRILL = "ViaDrill"
    BACK_DRILL = "BackDrill"
    COMPONENT_DRILL = "ComponentDrill"
    MECHANICAL_DRILL = "MechanicalDrill"
    CASTELLATED_DRILL = "CastellatedDrill"
    OTHER_DRILL = "OtherDrill"
    COMPONENT_PAD = "ComponentPad"
    SMD_PAD = "SMDPad"
    BGA_PAD = "BGAPad"
    CONNECTOR_PAD = "ConnectorPad"
    HEATSINK_PAD = "HeatsinkPad"
    VIA_PAD = "ViaPad"
    TEST_PAD = "TestPad"
    CASTELLATED_PAD = "CastellatedPad"
    FIDUCIAL_PAD = "FiducialPad"
    THERMAL_RELIEF_PAD = "ThermalReliefPad"
    WASHER_PAD = "WasherPad"
    ANTI_PAD = "AntiPad"
    OTHER_PAD = "OtherPad"
    CONDUCTOR = "Conductor"
    ETCHED_COMPONENT = "EtchedComponent"
    NON_CONDUCTOR = "NonConductor"
    COPPER_BALANCING = "CopperBalancing"
    BORDER = "Border"
    OTHER_COPPER = "OtherCopper"
    COMPONENT_MAIN = "ComponentMain"
    COMPONENT_OUTLINE = "ComponentOutline"
    COMPONENT_PIN = "ComponentPin"
    PROFILE = "Profile"
    MATERIAL = "Material"
    NON_MATERIAL = "NonMaterial"
    OTHER = "Other"
    # Deprecated
    SLOT = "Slot"
    CUT_OUT = "CutOut"
    CAVITY = "Cavity"
    DRAWING = "Drawing"


# function -> (qualifier type, qualifier required)
_QUALIFIERS: dict[ApertureFunction, tuple[type, bool]] = {
    ApertureFunction.VIA_DRILL: (ViaProtection, False),
    ApertureFunction.COMPONENT_DRILL: (PressFit, False),
    ApertureFunction.MECHANICAL_DRILL: (DrillFunction, False),
    ApertureFunction.OTHER_DRILL: (str, True),
    ApertureFunction.SMD_PAD: (PadDefinition, True),
    ApertureFunction.BGA_PAD: (PadDefinition, True),
    ApertureFunction.FIDUCIAL_PAD: (FiducialScope, True),
    ApertureFunction.OTHER_PAD: (str, True),
    ApertureFunction.OTHER_COPPER: (str, True),
    ApertureFunction.COMPONENT_OUTLINE: (ComponentOutlineKind, True),
    ApertureFunction.OTHER: (str, True),
}


@dataclass(frozen=True, slots=True)
class AperFunction(ApertureAttribute):
    """``.AperFunction,<function>[,<qualifier>]``.

    Parameters
    ----------
    function : ApertureFunction
        What the aperture is used for.
    qualifier : Enum | str | None
        Extra field accepted by some functions, e.g.
        :class:`PadDefinition` for ``SMD_PAD`` or free text for
        ``OTHER_PAD``.  Functions without a qualifier reject one.
    """

    function: ApertureFunction
    qualifier: Enum | str | None = None

    def __post_init__(self) -> None:
        _require(self.function, ApertureFunction, "function")
        if self.function not in _QUALIFIERS:
            if self.qualifier is not None:
                raise ValueError(
                    f"{self.function.value} takes no qualifier, "
                    f"got {self.qualifier!r}"
                )
            return
        expected, required = _QUALIFIERS[self.function]
        if self.qualifier is None:
            if required:
                raise ValueError(
                    f"{self.function.value} requires a "
                    f"{expected.__name__} qualifier, got None"
                )
        elif not isinstance(self.qualifier, expected):
            raise ValueError(
                f"{self.function.value} qualifier must be "
                f"{expected.__name__}, got {self.qualifier!r}"
            )


@dataclass(frozen=True, slots=True)
class DrillTolerance(ApertureAttribute):
    """``.DrillTolerance,<plus>,<minus>``."""

    plus: Number
    minus: Number


class FlashTextMode(Enum):
    CHARACTERS = "C"
    BARCODE = "B"


class FlashTextMirroring(Enum):
    READABLE = "R"
    MIRRORED = "M"


@dataclass(frozen=True, slots=True)
class FlashText(ApertureAttribute):
    """``.FlashText``.  Absent optional fields render as empty slots."""

    text: str
    mode: FlashTextMode
    mirroring: FlashTextMirroring
    font: str | None = None
    size: Number | None = None
    comment: str | None = None


# ---------------------------------------------------------------------------
# Object attributes
# ---------------------------------------------------------------------------

NOT_CONNECTED = "N/C"
"""Net name for pads that are intentionally not connected."""


@dataclass(frozen=True, slots=True)
class Net(ObjectAttribute):
    """``.N`` -- net names.  An empty tuple renders ``.N,``."""

    names: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class Pin(ObjectAttribute):
    """``.P,<reference>,<number>[,<function>]``."""

    reference: str
    number: str
    function: str | None = None


@dataclass(frozen=True, slots=True)
class ComponentReference(ObjectAttribute):
    """``.C,<reference>``."""

    reference: str


class ComponentMounting(Enum):
    THROUGH_HOLE = "TH"
    SMD = "SMD"
    PRESS_FIT = "Pressfit"
    OTHER = "Other"


class CharacteristicKind(Enum):
    """Component characteristic names, valued by their attribute name."""

    ROTATION = ".CRot"
    MANUFACTURER = ".CMfr"
    MPN = ".CMPN"
    VALUE = ".CVal"
    MOUNT = ".CMnt"
    FOOTPRINT = ".CFtp"
    PACKAGE_NAME = ".CPgN"
    PACKAGE_DESCRIPTION = ".CPgD"
    HEIGHT = ".CHgt"
    LIBRARY_NAME = ".CLbN"
    LIBRARY_DESCRIPTION = ".CLbD"


_NUMERIC_CHARACTERISTICS = frozenset(
    {CharacteristicKind.ROTATION, CharacteristicKind.HEIGHT}
)


@dataclass(frozen=True, slots=True)
class ComponentCharacteristic(ObjectAttribute):
    """One ``.Cxxx`` component characteristic.

    Rotation and height take numbers, mount takes a
    :class:`ComponentMounting`, all others take text.
    """

    kind: CharacteristicKind
    value: Number | ComponentMounting | str

    def __post_init__(self) -> None:
        _require(self.kind, CharacteristicKind, "kind")
        if self.kind in _NUMERIC_CHARACTERISTICS:
            _require(self.value, (int, float, Decimal), self.kind.value)
        elif self.kind is CharacteristicKind.MOUNT:
            _require(self.value, ComponentMounting, self.kind.value)
        else:
            _require(self.value, str, self.kind.value)


@dataclass(frozen=True, slots=True)
class ComponentSuppliers(ObjectAttribute):
    """``.CSup,<supplier>,<part>{,<supplier>,<part>}``."""

    parts: tuple[tuple[str, str], ...]

    def __post_init__(self) -> None:
        if not isinstance(self.parts, tuple) or not self.parts:
            raise ValueError(f"CSup needs at least one supplier part, got {self.parts!r}")
        for pair in self.parts:
            if not isinstance(pair, tuple) or len(pair) != 2:
                raise ValueError(f"supplier part must be a (supplier, part) pair, got {pair!r}")
            _require(pair[0], str, "supplier")
            _require(pair[1], str, "part")


# ---------------------------------------------------------------------------
# Lowering
# ---------------------------------------------------------------------------


def _s(value: str) -> StringField:
    return StringField(value)


def _e(value: Enum) -> EnumField:
    return EnumField(value)


def _optional(*values: Field | None) -> tuple[Field, ...]:
    return tuple(v for v in values if v is not None)


def _file_function_fields(ff: FileFunction) -> tuple[Field, ...]:
    if isinstance(ff, CopperLayer):
        return _optional(
            _s("Copper"), _s(f"L{ff.layer}"), _e(ff.position),
            _e(ff.copper_type) if ff.copper_type else None,
        )
    if isinstance(ff, PlatedLayer):
        return _optional(
            _s("Plated"), IntegerField(ff.from_layer), IntegerField(ff.to_layer),
            _e(ff.drill), _e(ff.label) if ff.label else None,
        )
    if isinstance(ff, NonPlatedLayer):
        return _optional(
            _s("NonPlated"), IntegerField(ff.from_layer),
            IntegerField(ff.to_layer), _e(ff.drill),
            _e(ff.label) if ff.label else None,
        )
    if isinstance(ff, ProfileLayer):
        return (_s("Profile"), _e(ff.plating))
    if isinstance(ff, MaskLayer):
        return _optional(
            _e(ff.kind), _e(ff.position),
            IntegerField(ff.index) if ff.index is not None else None,
        )
    if isinstance(ff, ComponentLayer):
        return (_s("Component"), _s(f"L{ff.layer}"), _e(ff.position))
    if isinstance(ff, SidedLayer):
        return (_e(ff.kind), _e(ff.position))
    if isinstance(ff, VCutLayer):
        return _optional(_s("Vcut"), _e(ff.position) if ff.position else None)
    if isinstance(ff, PlainLayer):
        return (_e(ff.kind),)
    if isinstance(ff, NamedLayer):
        return (_e(ff.kind), _s(ff.value))
    raise GerberError(f"Unsupported file function: {type(ff).__name__}")


def _file_attribute(attr: FileAttribute) -> Attribute:
    kind = AttributeKind.FILE
    if isinstance(attr, FileFunction):
        return Attribute(kind, ".FileFunction", _file_function_fields(attr))
    if isinstance(attr, Part):
        fields = _optional(
            _e(attr.kind),
            _s(attr.description) if attr.description is not None else None,
        )
        return Attribute(kind, ".Part", fields)
    if isinstance(attr, FilePolarity):
        return Attribute(kind, ".FilePolarity", (_e(attr.polarity),))
    if isinstance(attr, SameCoordinates):
        fields = () if attr.ident is None else (_s(str(attr.ident)),)
        return Attribute(kind, ".SameCoordinates", fields)
    if isinstance(attr, CreationDate):
        return Attribute(kind, ".CreationDate", (_s(attr.timestamp.isoformat()),))
    if isinstance(attr, GenerationSoftware):
        fields = _optional(
            _s(attr.vendor), _s(attr.application),
            _s(attr.version) if attr.version is not None else None,
        )
        return Attribute(kind, ".GenerationSoftware", fields)
    if isinstance(attr, ProjectId):
        return Attribute(
            kind, ".ProjectId",
            (_s(attr.name), _s(str(attr.guid)), _s(attr.revision)),
        )
    if isinstance(attr, Md5):
        return Attribute(kind, ".MD5", (_s(attr.digest),))
    raise GerberError(f"Unsupported file attribute: {type(attr).__name__}")


def _aperture_attribute(attr: ApertureAttribute) -> Attribute:
    kind = AttributeKind.APERTURE
    if isinstance(attr, AperFunction):
        fields: list[Field] = [_e(attr.function)]
        if isinstance(attr.qualifier, Enum):
            fields.append(_e(attr.qualifier))
        elif attr.qualifier is not None:
            fields.append(_s(attr.qualifier))
        return Attribute(kind, ".AperFunction", tuple(fields))
    if isinstance(attr, DrillTolerance):
        return Attribute(
            kind, ".DrillTolerance",
            (DecimalField(attr.plus), DecimalField(attr.minus)),
        )
    if isinstance(attr, FlashText):
        size = DecimalField(attr.size) if attr.size is not None else _s("")
        return Attribute(
            kind, ".FlashText",
            (
                _s(attr.text), _e(attr.mode), _e(attr.mirroring),
                _s(attr.font or ""), size, _s(attr.comment or ""),
            ),
        )
    raise GerberError(f"Unsupported aperture attribute: {type(attr).__name__}")


def _object_attribute(attr: ObjectAttribute) -> Attribute:
    kind = AttributeKind.OBJECT
    if isinstance(attr, Net):
        names = attr.names or ("",)
        return Attribute(kind, ".N", tuple(_s(n) for n in names))
    if isinstance(attr, Pin):
        fields = _optional(
            _s(attr.reference), _s(attr.number),
            _s(attr.function) if attr.function is not None else None,
        )
        return Attribute(kind, ".P", fields)
    if isinstance(attr, ComponentReference):
        return Attribute(kind, ".C", (_s(attr.reference),))
    if isinstance(attr, ComponentCharacteristic):
        if isinstance(attr.value, ComponentMounting):
            value: Field = _e(attr.value)
        elif isinstance(attr.value, str):
            value = _s(attr.value)
        else:
            value = DecimalField(attr.value)
        return Attribute(kind, attr.kind.value, (value,))
    if isinstance(attr, ComponentSuppliers):
        fields = tuple(
            _s(text) for pair in attr.parts for text in pair
        )
        return Attribute(kind, ".CSup", fields)
    raise GerberError(f"Unsupported object attribute: {type(attr).__name__}")


def to_attribute(attr: StandardAttribute | Attribute) -> Attribute:
    """Lower a typed standard attribute to its generic form.

    Generic :class:`Attribute` instances pass through unchanged.

    Raises
    ------
    GerberError
        If *attr* is not a known attribute record.
    """
    if isinstance(attr, Attribute):
        return attr
    if isinstance(attr, FileAttribute):
        return _file_attribute(attr)
    if isinstance(attr, ApertureAttribute):
        return _aperture_attribute(attr)
    if isinstance(attr, ObjectAttribute):
        return _object_attribute(attr)
    raise GerberError(f"Unsupported attribute: {type(attr).__name__}")

"""
Attribute module.

Generic attributes with typed fields, the typed standard X2 vocabulary,
and the encoding of both into extended-code or standard-comment
placement.
"""

from gerber_ir.attributes.encoding import (
    STANDARD_COMMENT_MARKER,
    check_text,
    encode_attribute_body,
    render_attribute,
    render_deletion,
)
from gerber_ir.attributes.model import (
    Attribute,
    AttributeKind,
    DecimalField,
    EnumField,
    Field,
    IntegerField,
    Placement,
    StringField,
    user_attribute,
)
from gerber_ir.attributes.standard import (
    NOT_CONNECTED,
    AperFunction,
    ApertureAttribute,
    ApertureFunction,
    CharacteristicKind,
    ComponentCharacteristic,
    ComponentLayer,
    ComponentMounting,
    ComponentOutlineKind,
    ComponentReference,
    ComponentSuppliers,
    CopperLayer,
    CopperType,
    CreationDate,
    DrillFunction,
    DrillRouteType,
    DrillTolerance,
    ExtendedPosition,
    FiducialScope,
    FileAttribute,
    FileFunction,
    FilePolarity,
    FilePolarityKind,
    FlashText,
    FlashTextMirroring,
    FlashTextMode,
    GenerationSoftware,
    MaskKind,
    MaskLayer,
    Md5,
    NamedKind,
    NamedLayer,
    Net,
    NonPlatedDrillType,
    NonPlatedLayer,
    ObjectAttribute,
    PadDefinition,
    Part,
    PartKind,
    Pin,
    PlainKind,
    PlainLayer,
    PlatedDrillType,
    PlatedLayer,
    Position,
    PressFit,
    ProfileLayer,
    ProfilePlating,
    ProjectId,
    SameCoordinates,
    SidedKind,
    SidedLayer,
    StandardAttribute,
    VCutLayer,
    ViaProtection,
    to_attribute,
)

__all__ = [
    "STANDARD_COMMENT_MARKER",
    "check_text",
    "encode_attribute_body",
    "render_attribute",
    "render_deletion",
    "Attribute",
    "AttributeKind",
    "DecimalField",
    "EnumField",
    "Field",
    "IntegerField",
    "Placement",
    "StringField",
    "user_attribute",
    "NOT_CONNECTED",
    "AperFunction",
    "ApertureAttribute",
    "ApertureFunction",
    "CharacteristicKind",
    "ComponentCharacteristic",
    "ComponentLayer",
    "ComponentMounting",
    "ComponentOutlineKind",
    "ComponentReference",
    "ComponentSuppliers",
    "CopperLayer",
    "CopperType",
    "CreationDate",
    "DrillFunction",
    "DrillRouteType",
    "DrillTolerance",
    "ExtendedPosition",
    "FiducialScope",
    "FileAttribute",
    "FileFunction",
    "FilePolarity",
    "FilePolarityKind",
    "FlashText",
    "FlashTextMirroring",
    "FlashTextMode",
    "GenerationSoftware",
    "MaskKind",
    "MaskLayer",
    "Md5",
    "NamedKind",
    "NamedLayer",
    "Net",
    "NonPlatedDrillType",
    "NonPlatedLayer",
    "ObjectAttribute",
    "PadDefinition",
    "Part",
    "PartKind",
    "Pin",
    "PlainKind",
    "PlainLayer",
    "PlatedDrillType",
    "PlatedLayer",
    "Position",
    "PressFit",
    "ProfileLayer",
    "ProfilePlating",
    "ProjectId",
    "SameCoordinates",
    "SidedKind",
    "SidedLayer",
    "StandardAttribute",
    "VCutLayer",
    "ViaProtection",
    "to_attribute",
]

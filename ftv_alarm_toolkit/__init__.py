"""
FactoryTalk View Alarm Toolkit - turn HMI alarm exports into PLC tag lists.

FactoryTalk View exports its alarm configuration as XML: ``<trigger>``
elements describe a PLC expression to watch and ``<message>`` elements hang
an alarm text off a trigger (optionally selecting a single bit with a
``trigger-value``).  This toolkit rebuilds the real PLC address behind every
message, fixes the exporter's off-by-one bit numbering, and writes a sorted
Tag / Description spreadsheet.

Core Design Principle:
    Parsing is a pure function of one document.  Files can be read in
    parallel; the final ordering pass makes the output deterministic no
    matter which file finished first.

Usage:
    from ftv_alarm_toolkit import converter, exporter

    result = converter.convert_files(['Alarms_Line1.xml', 'Alarms_Line2.xml'])
    print(result.summary())
    exporter.export_rows('Alarm_Tags.xlsx', result.rows)

    # Single document, no I/O
    from ftv_alarm_toolkit import parser, ordering
    rows = parser.parse_document_rows(root_element)
    rows = ordering.sort_rows(rows)
"""

__version__ = '0.1.0'


def __getattr__(name):
    """Lazy import to keep ``import ftv_alarm_toolkit`` free of openpyxl."""
    if name in ('AlarmRow', 'TriggerInfo', 'TagKey'):
        from . import models
        return getattr(models, name)
    if name in ('ConversionOptions', 'ConversionResult'):
        from . import converter
        return getattr(converter, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    'AlarmRow',
    'TriggerInfo',
    'TagKey',
    'ConversionOptions',
    'ConversionResult',
]

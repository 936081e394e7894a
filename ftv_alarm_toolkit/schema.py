"""
FactoryTalk View Alarm Export Constants.

Defines the XML element and attribute names read from alarm exports, the
trigger type that selects bit addressing, and the layout of the generated
spreadsheet.
"""

# Element names (matched on local name, namespaces are ignored).
TRIGGER_ELEMENT = 'trigger'
MESSAGE_ELEMENT = 'message'

# <trigger id="T1" type="bit" exp="{Line1.Fault}"/>
TRIGGER_ID_ATTR = 'id'
TRIGGER_TYPE_ATTR = 'type'
TRIGGER_EXPRESSION_ATTR = 'exp'

# <message trigger="#T1" trigger-value="3" text="[WARN] Motor overload"/>
MESSAGE_TRIGGER_ATTR = 'trigger'
MESSAGE_TRIGGER_VALUE_ATTR = 'trigger-value'
MESSAGE_TEXT_ATTR = 'text'

# Prefix FactoryTalk puts in front of trigger references.
TRIGGER_REFERENCE_PREFIX = '#'

# Trigger type whose trigger-value selects a bit (compared case-insensitively).
BIT_TRIGGER_TYPE = 'bit'

# Input discovery
XML_EXTENSION = '.xml'
DEFAULT_OUTPUT_FILENAME = 'Alarm_Tags.xlsx'

# ---------------------------------------------------------------------------
# Spreadsheet layout
# ---------------------------------------------------------------------------

WORKSHEET_TITLE = 'Alarm Tags'
HEADERS = ('Tag', 'Description')

# Column widths in Excel character units, keyed by column letter.
COLUMN_WIDTHS = {
    'A': 40,
    'B': 90,
}
HEADER_ROW_HEIGHT = 22

# ARGB-less hex colours as openpyxl expects them.
HEADER_FONT_COLOR = 'FFFFFF'
HEADER_FILL_COLOR = '333F48'
HEADER_BOTTOM_BORDER_COLOR = '222830'
STRIPE_FILL_COLOR = 'F4F6F8'
OUTSIDE_BORDER_COLOR = '99A4AD'
INSIDE_BORDER_COLOR = 'C7D0D8'

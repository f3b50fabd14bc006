# engconvert

Convert the language files of the classic Impressions city-building games
between their binary ENG format and an editable XML format, and back again.

Two kinds of ENG file are handled, and the kind is detected automatically:

- **text files**: groups of numbered strings, written to XML as
  `<strings>` / `<group>` / `<string>` elements;
- **message files**: in-game messages with dialog geometry, images, titles,
  subtitles, videos and body text, written to XML as `<messages>` /
  `<message>` elements. The control character the game uses inside message
  bodies appears as `~` in the XML.

## Installation

```
pip install .
```

## Usage

Convert an ENG file to XML:

```
engconvert eng-to-xml c3.eng c3.xml
```

Edit the XML in any text editor, then convert it back:

```
engconvert xml-to-eng c3.xml c3.eng
```

The output file may be left out; it is then named after the input file with
its last four characters replaced by `.xml` or `.eng`.

Choose the character encoding of the ENG file with `-e` / `--encoding`. The
default is `Windows-1252`. The other choices are `Windows-1250` (Eastern
European), `Windows-1251` (Cyrillic), `Windows-1253` (Greek), `CP949`
(Korean) and `Shift_JIS` (Japanese).

```
engconvert eng-to-xml --encoding Windows-1251 c3.eng c3.xml
```

The command prints either `Conversion OK` or `*** Conversion FAILED ***`,
followed by the log of the conversion, and exits with status 1 on failure.
Run `engconvert --help` for the full list of options.

## Using it from Python

```python
from engconvert.logger import ConversionError, Logger
from engconvert.fileconverter import convert_eng_to_xml

logger = Logger()
try:
    convert_eng_to_xml("c3.eng", "c3.xml", "Windows-1252", logger)
except ConversionError:
    print("conversion failed")
print("\n".join(logger.messages()))
```

`convert_eng_to_xml` and `convert_xml_to_eng` raise `ConversionError` after
logging the reason. `detect_eng_file_type` and `detect_xml_file_type` return
a `FileType` for the bytes of a file.

The lower-level modules read and write the individual formats from and to
bytes:

- `engconvert.texteng`: `read_text_eng`, `write_text_eng`
- `engconvert.textxml`: `read_text_xml`, `write_text_xml`
- `engconvert.messageeng`: `read_message_eng`, `write_message_eng`
- `engconvert.messagexml`: `read_message_xml`, `write_message_xml`

The data models are `TextFile` / `TextGroup` and `MessageFile` /
`MessageEntry`.

## What it does not do

- There is no graphical interface; conversions are run from the command
  line or from Python.
- The game-specific Chinese encodings `c3-tc` (Traditional) and `c3-sc`
  (Simplified) are accepted by `--encoding` but are not available: a
  conversion that asks for them fails with an "Encoding not supported"
  error.
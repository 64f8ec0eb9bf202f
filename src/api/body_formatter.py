"""
Request and response body formatting.
Pretty-prints JSON, XML and YAML bodies and repairs the JSON that usually
comes out of hand-written cURL commands (single quotes, trailing commas,
bare keys).
"""

import json
import re
import xml.etree.ElementTree as ET
from xml.dom import minidom

import yaml


# Create a custom YAML loader that doesn't auto-convert dates to date objects
class StringLoader(yaml.SafeLoader):
    """Custom YAML loader that treats dates as strings."""
    pass

# Remove the implicit timestamp resolver so dates stay as strings
StringLoader.yaml_implicit_resolvers = {
    key: [resolver for resolver in resolvers if resolver[0] != 'tag:yaml.org,2002:timestamp']
    for key, resolvers in StringLoader.yaml_implicit_resolvers.items()
}


# Body of a single-quoted string, honouring backslash escapes
_SINGLE_QUOTED = r"'([^'\\]*(?:\\.[^'\\]*)*)'"

_SINGLE_QUOTED_VALUE = re.compile(r":\s*" + _SINGLE_QUOTED)
_SINGLE_QUOTED_KEY = re.compile(_SINGLE_QUOTED + r"\s*:")
_SINGLE_QUOTED_FIRST_ITEM = re.compile(r"\[\s*" + _SINGLE_QUOTED)
_SINGLE_QUOTED_NEXT_ITEM = re.compile(r",\s*" + _SINGLE_QUOTED)
_BARE_KEY = re.compile(r"([{,]\s*)([a-zA-Z_$][a-zA-Z0-9_$]*)\s*:")
_TRAILING_COMMA = re.compile(r",(\s*[}\]])")


def escape_double_quoted(text: str) -> str:
    """Escape a string for use inside double quotes. Backslashes go first."""
    return text.replace('\\', '\\\\').replace('"', '\\"')


def escape_single_quoted(text: str) -> str:
    """Escape a string for use inside single quotes. Backslashes go first."""
    return text.replace('\\', '\\\\').replace("'", "\\'")


def _is_json(text: str) -> bool:
    try:
        json.loads(text)
        return True
    except (json.JSONDecodeError, TypeError):
        return False


class BodyFormatter:
    """Formats and repairs HTTP message bodies."""

    def __init__(self):
        self.yaml_loader = StringLoader

    def detect_format(self, data: str) -> str:
        """Detect the format of a body."""
        data = data.strip()
        if not data:
            return 'unknown'

        if _is_json(data):
            return 'json'

        try:
            ET.fromstring(data)
            return 'xml'
        except ET.ParseError:
            pass

        # YAML accepts almost anything, so it is checked last
        try:
            parsed = yaml.load(data, Loader=self.yaml_loader)
            if isinstance(parsed, (dict, list)):
                return 'yaml'
        except yaml.YAMLError:
            pass

        return 'unknown'

    def repair_json(self, body: str, quote_bare_keys: bool = False) -> str:
        """
        Try to turn almost-JSON into JSON.

        Valid JSON is returned untouched. Otherwise single-quoted strings are
        rewritten with double quotes, trailing commas are dropped and, when
        requested, bare identifier keys are quoted. The rewrite is only
        returned if it parses; otherwise the original body comes back.
        """
        if _is_json(body):
            return body

        def value(match: re.Match) -> str:
            return f': "{escape_double_quoted(match.group(1))}"'

        def key(match: re.Match) -> str:
            return f'"{escape_double_quoted(match.group(1))}":'

        def first_item(match: re.Match) -> str:
            return f'["{escape_double_quoted(match.group(1))}"'

        def next_item(match: re.Match) -> str:
            return f', "{escape_double_quoted(match.group(1))}"'

        fixed = _SINGLE_QUOTED_VALUE.sub(value, body)
        fixed = _SINGLE_QUOTED_KEY.sub(key, fixed)
        if quote_bare_keys:
            fixed = _BARE_KEY.sub(r'\1"\2":', fixed)
        fixed = _SINGLE_QUOTED_FIRST_ITEM.sub(first_item, fixed)
        fixed = _SINGLE_QUOTED_NEXT_ITEM.sub(next_item, fixed)
        fixed = _TRAILING_COMMA.sub(r'\1', fixed)

        if _is_json(fixed):
            return fixed
        return body

    def format_json(self, json_str: str) -> str:
        """Format/prettify JSON string."""
        try:
            data = json.loads(json_str)
            return json.dumps(data, indent=2, ensure_ascii=False)
        except json.JSONDecodeError as e:
            raise ValueError(f"JSON formatting failed: {str(e)}")

    def format_xml(self, xml_str: str) -> str:
        """Format/prettify XML string."""
        try:
            dom = minidom.parseString(xml_str.strip())
            pretty = dom.toprettyxml(indent="  ")
        except Exception as e:
            raise ValueError(f"XML formatting failed: {str(e)}")

        # minidom keeps whitespace-only text nodes as blank lines
        lines = [line for line in pretty.split('\n') if line.strip()]
        if lines and lines[0].startswith('<?xml') and not xml_str.lstrip().startswith('<?xml'):
            lines = lines[1:]
        return '\n'.join(lines)

    def format_yaml(self, yaml_str: str) -> str:
        """Format/prettify YAML string."""
        try:
            data = yaml.load(yaml_str, Loader=self.yaml_loader)
            return yaml.dump(data, default_flow_style=False, allow_unicode=True, sort_keys=False)
        except yaml.YAMLError as e:
            raise ValueError(f"YAML formatting failed: {str(e)}")

    def beautify(self, body: str, content_type: str) -> str:
        """Pretty-print a body according to its content type."""
        if not body.strip():
            return body

        content_type = (content_type or '').lower()

        if 'json' in content_type:
            try:
                return self.format_json(body)
            except ValueError:
                fixed = self.repair_json(body)
                try:
                    return self.format_json(fixed)
                except ValueError:
                    return fixed

        if 'xml' in content_type:
            try:
                return self.format_xml(body)
            except ValueError:
                return body

        if 'yaml' in content_type:
            try:
                return self.format_yaml(body)
            except ValueError:
                return body

        return body

    def fix_body(self, body: str, content_type: str) -> str:
        """Repair a JSON body, quoting bare keys too, and pretty-print it when possible."""
        if not body.strip() or 'json' not in (content_type or '').lower():
            return body

        fixed = self.repair_json(body, quote_bare_keys=True)
        try:
            return self.format_json(fixed)
        except ValueError:
            return fixed


# Global formatter instance
formatter = BodyFormatter()


def repair_json(body: str, quote_bare_keys: bool = False) -> str:
    """Repair an almost-JSON body; see BodyFormatter.repair_json."""
    return formatter.repair_json(body, quote_bare_keys)


def beautify_body(body: str, content_type: str) -> str:
    """Pretty-print a body according to its content type."""
    return formatter.beautify(body, content_type)


def fix_body(body: str, content_type: str) -> str:
    """Repair and pretty-print a JSON body."""
    return formatter.fix_body(body, content_type)

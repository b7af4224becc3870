"""Tree-native (.solxml) solution format."""

from solutionlib.infra.xml.xml_storage import read_xml_from_file, write_xml_to_file

__all__ = ["read_xml_from_file", "write_xml_to_file"]

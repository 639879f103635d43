import tempfile
import unittest
from pathlib import Path

from conninfo_parse.config import ConninfoConfig
from conninfo_parse.exceptions import ConninfoConfigError
from conninfo_parse.renderer import OutputFormat

DATA = Path(__file__).parent / "data" / "config"


class TestConfig(unittest.TestCase):
    """Test the class ConninfoConfig."""

    def test_defaults(self) -> None:
        """Test the default configuration."""
        cfg = ConninfoConfig()
        self.assertEqual(cfg.output_format, OutputFormat.DELIMITED)
        self.assertEqual(cfg.delimiter, "\t")
        self.assertEqual(cfg.unavailable_formats, [])
        self.assertTrue(cfg.use_defaults)
        self.assertFalse(cfg.service_file_lookup)

    def test_from_yaml(self) -> None:
        """Test loading configuration files."""
        cfg = ConninfoConfig.from_yaml(DATA / "json_output.yaml")
        self.assertEqual(cfg.output_format, OutputFormat.JSON)
        self.assertFalse(cfg.use_defaults)

        cfg = ConninfoConfig.from_yaml(str(DATA / "no_json.yaml"))
        self.assertEqual(cfg.output_format, OutputFormat.DELIMITED)
        self.assertEqual(cfg.delimiter, ",")
        self.assertEqual(cfg.unavailable_formats, [OutputFormat.JSON])

    def test_invalid(self) -> None:
        """Test invalid configurations."""
        with self.assertRaises(ConninfoConfigError):
            ConninfoConfig.from_yaml(DATA / "invalid_key.yaml")
        with self.assertRaises(ConninfoConfigError):
            ConninfoConfig.from_yaml(DATA / "does_not_exist.yaml")
        with self.assertRaises(ConninfoConfigError):
            ConninfoConfig(output={"delimiter": ""})
        with self.assertRaises(ConninfoConfigError):
            ConninfoConfig(output={"format": "xml"})

    def test_invalid_yaml(self) -> None:
        """Test files which are not valid YAML mappings."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "broken.yaml"
            path.write_text("output: [\n")
            with self.assertRaises(ConninfoConfigError):
                ConninfoConfig.from_yaml(path)
            path.write_text("- a list\n")
            with self.assertRaises(ConninfoConfigError):
                ConninfoConfig.from_yaml(path)
            path.write_text("")
            self.assertEqual(ConninfoConfig.from_yaml(path).output_format, OutputFormat.DELIMITED)

    def test_minimum_version(self) -> None:
        """Test the minimum version check."""
        with self.assertRaises(ConninfoConfigError):
            ConninfoConfig.from_yaml(DATA / "too_recent.yaml")
        cfg = ConninfoConfig.from_yaml(DATA / "too_recent.yaml", validate=False)
        self.assertEqual(str(cfg.config.minimum_version), "999.0.0")
        with self.assertRaises(ConninfoConfigError):
            ConninfoConfig(minimum_version="not a version")

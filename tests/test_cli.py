import json
import os
import tempfile
import unittest

from click.testing import CliRunner

from json_disk_store.cli import cli, parse_value


class ParseValueTests(unittest.TestCase):
    def test_json_values(self):
        self.assertEqual(parse_value('{"a": 1}'), {"a": 1})
        self.assertEqual(parse_value("42"), 42)
        self.assertEqual(parse_value('"quoted"'), "quoted")

    def test_plain_string_fallback(self):
        self.assertEqual(parse_value("value1"), "value1")


class CliTests(unittest.TestCase):
    def setUp(self):
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        self.directory = tmp.name
        self.runner = CliRunner()

    def invoke(self, *args, **kwargs):
        return self.runner.invoke(cli, ["-d", self.directory, *args], **kwargs)

    def test_write_read_update_delete(self):
        result = self.invoke("write", "key1", "value1")
        self.assertEqual(result.exit_code, 0, result.output)
        key = result.output.strip()
        self.assertTrue(key.startswith("key1-"))

        result = self.invoke("read", key)
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(json.loads(result.output), "value1")

        result = self.invoke("update", key, '{"n": 2}')
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(json.loads(self.invoke("read", key).output), {"n": 2})

        result = self.invoke("delete", key)
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("Key deleted: true", result.output)

        result = self.invoke("delete", key)
        self.assertIn("Key deleted: false", result.output)

    def test_read_missing_key(self):
        result = self.invoke("read", "nonExistentKey")
        self.assertEqual(result.exit_code, 1)
        self.assertIn('Key "nonExistentKey" not found', result.output)

    def test_read_null_value(self):
        key = self.invoke("write", "k", "null").output.strip()

        result = self.invoke("read", key)
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(result.output.strip(), "null")

    def test_ask_password(self):
        result = self.invoke("-P", "write", "key1", "value1", input="secret\n")
        self.assertEqual(result.exit_code, 0, result.output)
        key = result.output.strip().splitlines()[-1]

        result = self.invoke("-p", "secret", "read", key)
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(json.loads(result.output), "value1")

    def test_update_missing_key(self):
        result = self.invoke("update", "nonExistentKey", "value")
        self.assertEqual(result.exit_code, 1)
        self.assertIn('Key "nonExistentKey" not found', result.output)

    def test_wrong_password(self):
        self.invoke("-p", "secret", "write", "key1", "value1")

        result = self.invoke("-p", "other", "read", "anything")
        self.assertEqual(result.exit_code, 1)
        self.assertIn("Check that the password is correct", result.output)

    def test_custom_file_name(self):
        result = self.invoke("-f", "other.json", "write", "key1", "value1")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertTrue(os.path.exists(os.path.join(self.directory, "other.json")))

    def test_demo(self):
        result = self.invoke("--cache", "-p", "secret", "demo")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("Read value: value1", result.output)
        self.assertIn("Updated value: newValue", result.output)
        self.assertIn("Key deleted: true", result.output)


if __name__ == "__main__":
    unittest.main()

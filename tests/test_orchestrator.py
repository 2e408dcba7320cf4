from __future__ import annotations

import json
import os
import tempfile
import unittest

import jwt

from contracts import ClaimDecodeError, DisputeLengthLimits, DisputeRecord, Environment
from orchestrator import DisputePublishingPolicy, process_dispute
from settings import StaticConfigProvider

SIGNING_KEY = "test-signing-key-with-at-least-32-bytes!"


class TestDisputePipeline(unittest.TestCase):
    def test_error_status_is_written_with_environment(self) -> None:
        ssa = jwt.encode({"software_environment": "Sandbox"}, SIGNING_KEY, algorithm="HS256")
        record = DisputeRecord(status_code=502, http_method="GET", response_body="r" * 40, software_statement=ssa)
        config = StaticConfigProvider(max_lengths=DisputeLengthLimits(response_body=16))

        with tempfile.TemporaryDirectory() as td:
            path = os.path.join(td, "disputes.jsonl")
            result = process_dispute(record, DisputePublishingPolicy(config=config, dispute_log_path=path))

            self.assertEqual(Environment.SANDBOX, result.environment)
            self.assertTrue(result.publishable)
            self.assertTrue(result.written)
            self.assertEqual(("publish_error_status", "dispute_written"), result.reasons)

            with open(path, "r", encoding="utf-8") as f:
                obj = json.loads(f.readline().strip())
            self.assertEqual("SANDBOX", obj["environment"])
            self.assertEqual("r" * 16, obj["response_body"])

    def test_non_error_status_not_written_when_flag_disabled(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            path = os.path.join(td, "disputes.jsonl")
            result = process_dispute(DisputeRecord(status_code=200), DisputePublishingPolicy(dispute_log_path=path))

            self.assertEqual(Environment.PRODUCTION, result.environment)
            self.assertFalse(result.publishable)
            self.assertFalse(result.written)
            self.assertEqual(("non_error_publishing_disabled",), result.reasons)
            self.assertFalse(os.path.exists(path))

    def test_publishable_without_log_path_is_not_written(self) -> None:
        policy = DisputePublishingPolicy(config=StaticConfigProvider(publish_non_error_disputes=True))
        result = process_dispute(DisputeRecord(status_code=201), policy)
        self.assertTrue(result.publishable)
        self.assertFalse(result.written)

    def test_explicit_log_path_overrides_policy(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            path = os.path.join(td, "override.jsonl")
            result = process_dispute(DisputeRecord(status_code=400), DisputePublishingPolicy(), dispute_log_path=path)
            self.assertTrue(result.written)
            self.assertTrue(os.path.exists(path))

    def test_malformed_statement_propagates(self) -> None:
        record = DisputeRecord(status_code=500, software_statement="broken")
        with self.assertRaises(ClaimDecodeError):
            process_dispute(record, DisputePublishingPolicy())


if __name__ == "__main__":
    unittest.main()

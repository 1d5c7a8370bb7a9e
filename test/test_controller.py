#!/usr/bin/env python3
import base64
import json
import sys
import os
import unittest
from unittest.mock import patch

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from app.controller import create_app, gke_event_notifier, handle_envelope
from app.errors import ConfigurationMissingError, DeliveryFailureError, PayloadParseError
from app.models import Envelope

URL = "https://hooks.slack.com/services/T000/B000/XXXX"
UPGRADE_ATTRIBUTES = {
    "type_url": "type.googleapis.com/google.container.v1beta1.UpgradeEvent",
    "cluster_name": "prod-1",
    "cluster_location": "us-east1",
    "payload": json.dumps({
        "resourceType": "MASTER",
        "currentVersion": "1.2",
        "targetVersion": "1.3",
        "operationStartTime": "2024-01-01T00:00Z",
        "operation": "op-1",
    }),
}


def _push_body(attributes, data=b"evento"):
    return {
        "message": {
            "data": base64.b64encode(data).decode("ascii"),
            "attributes": attributes,
            "messageId": "123",
        },
        "subscription": "projects/p/subscriptions/gke-events",
    }


class TestHandleEnvelope(unittest.TestCase):
    @patch("app.controller.send_slack_payload")
    def test_upgrade_message_is_sent(self, send):
        message = handle_envelope(Envelope(attributes=UPGRADE_ATTRIBUTES), webhook_url=URL, project_id="p")
        send.assert_called_once_with(message, webhook_url=URL)
        header = message["blocks"][0]["text"]["text"]
        for expected in ["prod-1", "1.2", "1.3"]:
            self.assertIn(expected, header)

    @patch("app.controller.send_slack_payload")
    def test_missing_webhook_checked_before_formatting(self, send):
        # payload quebrado: se formatasse antes, o erro seria PayloadParseError
        env = Envelope(attributes=dict(UPGRADE_ATTRIBUTES, payload="{"))
        with self.assertRaises(ConfigurationMissingError):
            handle_envelope(env, webhook_url="", project_id="p")
        send.assert_not_called()

    @patch("app.controller.send_slack_payload")
    def test_parse_error_sends_nothing(self, send):
        env = Envelope(attributes=dict(UPGRADE_ATTRIBUTES, payload="{"))
        with self.assertRaises(PayloadParseError):
            handle_envelope(env, webhook_url=URL, project_id="p")
        send.assert_not_called()


class TestBackgroundEntryPoint(unittest.TestCase):
    @patch("app.controller.send_slack_payload")
    @patch("app.controller.SLACK_WEBHOOK_URL", URL)
    def test_error_propagates(self, send):
        send.side_effect = DeliveryFailureError("500")
        event = {"data": base64.b64encode(b"x").decode("ascii"), "attributes": UPGRADE_ATTRIBUTES}
        with self.assertRaises(DeliveryFailureError):
            gke_event_notifier(event, None)


class TestPubSubPushEndpoint(unittest.TestCase):
    def setUp(self):
        self.app = create_app(webhook_url=URL, project_id="p")
        self.client = self.app.test_client()

    def test_health(self):
        resp = self.client.get('/health')
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.get_json()["status"], "ok")

    @patch("app.controller.send_slack_payload")
    def test_push_success(self, send):
        resp = self.client.post('/', json=_push_body(UPGRADE_ATTRIBUTES))
        self.assertEqual(resp.status_code, 204)
        send.assert_called_once()

    @patch("app.controller.send_slack_payload")
    def test_security_event_routed(self, send):
        attrs = {"type_url": "type.googleapis.com/google.container.v1beta1.SecurityBulletinEvent", "payload": "{}"}
        resp = self.client.post('/', json=_push_body(attrs, data=b"CVE-2024-0001"))
        self.assertEqual(resp.status_code, 204)
        message = send.call_args[0][0]
        self.assertEqual(message["blocks"][0]["text"]["text"], "CVE-2024-0001")

    @patch("app.controller.send_slack_payload")
    def test_invalid_push_body(self, send):
        resp = self.client.post('/', data="não é json", content_type="text/plain")
        self.assertEqual(resp.status_code, 400)
        resp = self.client.post('/', json={"subscription": "s"})
        self.assertEqual(resp.status_code, 400)
        send.assert_not_called()

    @patch("app.controller.send_slack_payload")
    def test_failures_return_500_for_redelivery(self, send):
        resp = self.client.post('/', json=_push_body(dict(UPGRADE_ATTRIBUTES, payload="{")))
        self.assertEqual(resp.status_code, 500)
        send.assert_not_called()

        send.side_effect = DeliveryFailureError("Slack respondeu 500")
        resp = self.client.post('/', json=_push_body(UPGRADE_ATTRIBUTES))
        self.assertEqual(resp.status_code, 500)


if __name__ == '__main__':
    unittest.main()

"""
Tests for the WebSocket subject server.

Each test runs an in-process aiohttp test server on its own event loop and
drives scheduler ticks by hand.
"""

import asyncio
import threading

import pytest
from aiohttp import test_utils

from glow_label.config import GlowLabelConfig
from glow_label.control import LabelServer


def run(scenario, config=None):
    """Run an async scenario against a fresh server."""
    server = LabelServer(config)

    async def main():
        client = test_utils.TestClient(test_utils.TestServer(server.build_app()))
        await client.start_server()
        try:
            await scenario(server, client)
        finally:
            await client.close()

    asyncio.run(main())
    return server


async def join(client, name="Steve"):
    ws = await client.ws_connect("/ws")
    await ws.send_json({"type": "join", "name": name})
    reply = await ws.receive_json(timeout=2)
    assert reply["type"] == "joined"
    return ws, reply


async def wait_until(predicate, timeout=2.0):
    for _ in range(int(timeout / 0.01)):
        if predicate():
            return True
        await asyncio.sleep(0.01)
    return predicate()


class TestJoin:

    def test_join_registers_subject(self):
        async def scenario(server, client):
            ws, reply = await join(client)

            assert reply["label"] == "FancyItem | Steve"
            assert len(reply["key"]) == 32
            assert server.subject_count == 1
            assert [s.name for s in server.active_subjects()] == ["Steve"]
            await ws.close()

        run(scenario)

    def test_each_join_gets_a_fresh_key(self):
        async def scenario(server, client):
            first, first_reply = await join(client)
            second, second_reply = await join(client, "Steve")

            assert first_reply["key"] != second_reply["key"]
            assert server.subject_count == 2
            await first.close()
            await second.close()

        run(scenario)

    def test_join_requires_name(self):
        async def scenario(server, client):
            ws = await client.ws_connect("/ws")
            await ws.send_json({"type": "join", "name": "  "})

            reply = await ws.receive_json(timeout=2)
            assert reply["type"] == "error"
            assert server.subject_count == 0
            await ws.close()

        run(scenario)

    def test_join_twice(self):
        async def scenario(server, client):
            ws, _ = await join(client)
            await ws.send_json({"type": "join", "name": "Alex"})

            reply = await ws.receive_json(timeout=2)
            assert reply == {"type": "error", "message": "Already joined"}
            assert server.subject_count == 1
            await ws.close()

        run(scenario)

    def test_commands_before_join(self):
        async def scenario(server, client):
            ws = await client.ws_connect("/ws")
            await ws.send_json({"type": "reset_gradient"})

            reply = await ws.receive_json(timeout=2)
            assert reply == {"type": "error", "message": "Send a join message first"}
            await ws.close()

        run(scenario)

    def test_custom_label_template(self):
        config = GlowLabelConfig.with_defaults()
        config.label.template = "* {name} *"

        async def scenario(server, client):
            ws, reply = await join(client, "Alex")
            assert reply["label"] == "* Alex *"
            await ws.close()

        run(scenario, config)


class TestFrames:

    def test_tick_sends_frame(self):
        async def scenario(server, client):
            ws, _ = await join(client)

            results = server.scheduler.on_tick()
            frame = await ws.receive_json(timeout=2)

            assert [result.ok for result in results] == [True]
            assert frame["type"] == "frame"
            label = frame["label"]
            assert label["text"] == ""
            assert label["bold"] is True
            assert "".join(part["text"] for part in label["extra"]) == "FancyItem | Steve"
            assert label["extra"][-1]["color"] == "#fe4800"
            await ws.close()

        run(scenario)

    def test_only_joined_sockets_get_frames(self):
        async def scenario(server, client):
            watcher = await client.ws_connect("/ws")
            ws, _ = await join(client)

            server.scheduler.on_tick()
            await ws.receive_json(timeout=2)

            await watcher.send_json({"type": "ping"})
            reply = await watcher.receive_json(timeout=2)
            assert reply["type"] == "error"
            await watcher.close()
            await ws.close()

        run(scenario)


class TestGradientCommands:

    def test_set_gradient_from_notation(self):
        async def scenario(server, client):
            ws, reply = await join(client)
            await ws.send_json({"type": "set_gradient", "notation": "<#0000FF:1 #FF0000:0>"})

            response = await ws.receive_json(timeout=2)
            assert response == {"type": "gradient_set", "notation": "<#FF0000:0.0 #0000FF:1.0>"}

            server.scheduler.on_tick()
            frame = await ws.receive_json(timeout=2)
            assert frame["label"]["extra"][-1]["color"] == "#0000ff"
            await ws.close()

        run(scenario)

    def test_set_gradient_from_preset(self):
        async def scenario(server, client):
            ws, reply = await join(client)
            await ws.send_json({"type": "set_gradient", "preset": "ocean"})

            response = await ws.receive_json(timeout=2)
            assert response["type"] == "gradient_set"
            assert response["notation"].startswith("<#0066FF:0.0 ")
            assert len(server.scheduler.state_for(reply["key"]).stops) == 3
            await ws.close()

        run(scenario)

    def test_invalid_notation_keeps_current_gradient(self):
        async def scenario(server, client):
            ws, reply = await join(client)
            server.scheduler.on_tick()
            await ws.receive_json(timeout=2)
            before = list(server.scheduler.state_for(reply["key"]).stops)

            await ws.send_json({"type": "set_gradient", "notation": "<#FF0000:2>"})

            response = await ws.receive_json(timeout=2)
            assert response["type"] == "error"
            assert "out of range" in response["message"]
            assert server.scheduler.state_for(reply["key"]).stops == before
            await ws.close()

        run(scenario)

    def test_unknown_preset(self):
        async def scenario(server, client):
            ws, _ = await join(client)
            await ws.send_json({"type": "set_gradient", "preset": "plaid"})

            response = await ws.receive_json(timeout=2)
            assert response == {"type": "error", "message": "Unknown preset: plaid"}
            await ws.close()

        run(scenario)

    def test_reset_gradient(self):
        async def scenario(server, client):
            ws, reply = await join(client)
            await ws.send_json({"type": "set_gradient", "notation": "<#FF0000:0 #0000FF:1>"})
            await ws.receive_json(timeout=2)

            await ws.send_json({"type": "reset_gradient"})

            assert await ws.receive_json(timeout=2) == {"type": "gradient_reset"}
            state = server.scheduler.state_for(reply["key"])
            assert state.animated
            assert state.stops[1].position == 0.5
            await ws.close()

        run(scenario)


class TestDeparture:

    def test_leave(self):
        async def scenario(server, client):
            ws, reply = await join(client)
            server.scheduler.on_tick()
            await ws.receive_json(timeout=2)

            await ws.send_json({"type": "leave"})

            assert await ws.receive_json(timeout=2) == {"type": "left"}
            assert server.subject_count == 0
            assert server.scheduler.state_for(reply["key"]) is None
            await ws.close()

        run(scenario)

    def test_disconnect_departs(self):
        async def scenario(server, client):
            ws, reply = await join(client)
            server.scheduler.on_tick()
            await ws.receive_json(timeout=2)

            await ws.close()

            assert await wait_until(lambda: server.subject_count == 0)
            assert await wait_until(lambda: server.scheduler.state_for(reply["key"]) is None)
            assert server.scheduler.on_tick() == []

        run(scenario)

    def test_slow_departure_does_not_stall_other_sockets(self):
        """Waiting for the scheduler happens off the event loop."""
        release = threading.Event()
        finished = threading.Event()

        async def scenario(server, client):
            on_subject_departed = server.scheduler.on_subject_departed

            def slow_departure(key):
                release.wait(2)
                on_subject_departed(key)
                finished.set()

            server.scheduler.on_subject_departed = slow_departure
            ws, reply = await join(client)
            other = await client.ws_connect("/ws")

            await ws.send_json({"type": "leave"})
            await other.send_json({"type": "ping"})

            assert (await other.receive_json(timeout=2))["type"] == "error"
            assert not finished.is_set()

            release.set()
            assert await ws.receive_json(timeout=2) == {"type": "left"}
            assert server.scheduler.state_for(reply["key"]) is None
            await other.close()
            await ws.close()

        run(scenario)


class TestMalformedMessages:

    def test_invalid_json(self):
        async def scenario(server, client):
            ws = await client.ws_connect("/ws")
            await ws.send_str("{not json")

            assert await ws.receive_json(timeout=2) == {"type": "error", "message": "Invalid JSON"}
            await ws.close()

        run(scenario)

    def test_non_object(self):
        async def scenario(server, client):
            ws = await client.ws_connect("/ws")
            await ws.send_json([1, 2, 3])

            reply = await ws.receive_json(timeout=2)
            assert reply == {"type": "error", "message": "Expected a JSON object"}
            await ws.close()

        run(scenario)

    def test_unknown_command(self):
        async def scenario(server, client):
            ws, _ = await join(client)
            await ws.send_json({"type": "dance"})

            reply = await ws.receive_json(timeout=2)
            assert reply == {"type": "error", "message": "Unknown command: dance"}
            await ws.close()

        run(scenario)


class TestLifecycle:

    def test_start_in_thread_reports_bind_failure(self, busy_port):
        server = LabelServer(host="127.0.0.1", port=busy_port)

        with pytest.raises(OSError):
            server.start_in_thread()

    def test_start_and_stop_thread(self):
        server = LabelServer(host="127.0.0.1", port=0)

        thread = server.start_in_thread()
        assert thread.is_alive()

        server.stop_thread()
        thread.join(timeout=2)
        assert not thread.is_alive()

def _order_and_work_order(client):
    order = client.post("/api/v1/orders", json={"customer": "ABC Construction"}).json()
    wo = client.post("/api/v1/work-orders", json={
        "order_id": order["id"], "product": "Linear Grill 200x50", "quantity": 50, "station": "cutting",
    }).json()
    return order, wo


def test_connected_frame_first(client, broadcaster):
    with client.websocket_connect("/ws") as ws:
        hello = ws.receive_json()
        assert hello["event"] == "connected"
        assert hello["data"]["subscriber_id"]
        assert broadcaster.subscriber_count == 1


def test_observer_receives_work_order_updates(client):
    with client.websocket_connect("/ws") as ws:
        ws.receive_json()
        order, wo = _order_and_work_order(client)
        created = ws.receive_json()
        assert created["event"] == "wo_updated"
        assert created["data"]["status"] == "pending"

        client.put(f"/api/v1/work-orders/{wo['id']}/status", json={"status": "in_progress", "progress": 45})
        updated = ws.receive_json()
        assert updated["event"] == "wo_updated"
        assert updated["data"]["progress"] == 45
        assert updated["data"]["order"]["customer"] == "ABC Construction"
        assert updated["seq"] > created["seq"]


def test_room_scoped_delivery(client):
    with client.websocket_connect("/ws") as maint, client.websocket_connect("/ws") as board:
        maint.receive_json()
        board.receive_json()
        maint.send_json({"action": "join_room", "room": "maintenance"})
        ack = maint.receive_json()
        assert ack == {"event": "room_joined", "data": {"room": "maintenance", "rooms": ["maintenance"]}, "seq": None}

        _order_and_work_order(client)
        log = client.post("/api/v1/downtime", json={"machine": "Station-1", "reason": "Machine Jammed"}).json()

        # the maintenance terminal skips production traffic
        alert = maint.receive_json()
        assert alert["event"] == "downtime_alert"
        assert alert["data"]["id"] == log["id"]

        # the board has no rooms and sees everything
        assert board.receive_json()["event"] == "wo_updated"
        assert board.receive_json()["event"] == "downtime_alert"

        client.put(f"/api/v1/downtime/{log['id']}/resolve")
        assert maint.receive_json()["event"] == "downtime_resolved"
        assert board.receive_json()["event"] == "downtime_resolved"


def test_leave_room(client):
    with client.websocket_connect("/ws") as ws:
        ws.receive_json()
        ws.send_json({"action": "join_room", "room": "maintenance"})
        ws.receive_json()
        ws.send_json({"action": "leave_room", "room": "maintenance"})
        left = ws.receive_json()
        assert left["event"] == "room_left"
        assert left["data"]["rooms"] == []


def test_bad_client_frames_get_error_frames(client):
    with client.websocket_connect("/ws") as ws:
        ws.receive_json()
        ws.send_text("not json")
        assert ws.receive_json()["event"] == "error"
        ws.send_json(["join_room"])
        assert ws.receive_json()["event"] == "error"
        ws.send_json({"action": "dance"})
        assert ws.receive_json()["event"] == "error"
        ws.send_json({"action": "join_room", "room": ""})
        err = ws.receive_json()
        assert err["event"] == "error"
        assert "Room" in err["data"]["detail"]

"""Weather Canvas — FastAPI server with WebSocket hub and frame loop.

Run: python server.py
Open: http://localhost:8000
"""

from __future__ import annotations

import asyncio
import json
import os
import random

from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI, WebSocket, WebSocketDisconnect
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles

load_dotenv()

from animation import AnimationLoop
from display_list import DisplayList
from fields import CloudField, ParticleField, Viewport
from fields.clouds import STABLE
from weather import ParameterBinding, WeatherState

STATIC_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "static")


def create_rng() -> random.Random:
    """Seeded from WEATHER_SEED when set, for reproducible sessions."""
    seed = os.environ.get("WEATHER_SEED")
    return random.Random(int(seed)) if seed else random.Random()


@asynccontextmanager
async def lifespan(app: FastAPI):
    global frame_task
    frame_task = asyncio.create_task(animation.run(broadcast_frame, has_clients))
    print(f"\n  Weather Canvas running at http://localhost:{os.environ.get('PORT', 8000)}")
    print(f"  Canvas: {viewport.width}x{viewport.height} @ {animation.frame_rate:g} fps")
    print(f"  Cloud drift: {cloud_field.drift_mode}\n")
    yield
    if frame_task:
        frame_task.cancel()


app = FastAPI(title="Weather Canvas", lifespan=lifespan)

# Global state
rng = create_rng()
viewport = Viewport(
    width=int(os.environ.get("CANVAS_WIDTH", 1280)),
    height=int(os.environ.get("CANVAS_HEIGHT", 720)),
)
weather_state = WeatherState()
particle_field = ParticleField(viewport, rng)
cloud_field = CloudField(viewport, rng, drift_mode=os.environ.get("CLOUD_DRIFT_MODE", STABLE))
binding = ParameterBinding(weather_state, particle_field, cloud_field, viewport)
animation = AnimationLoop(
    weather_state, particle_field, cloud_field, viewport,
    frame_rate=float(os.environ.get("FRAME_RATE", 60)),
)
connected_clients: list[WebSocket] = []
frame_task: asyncio.Task | None = None

binding.initialize()


def has_clients() -> bool:
    return bool(connected_clients)


async def broadcast_text(data: dict) -> None:
    """Send JSON text frame to all connected clients."""
    msg = json.dumps(data)
    disconnected = []
    for ws in connected_clients:
        try:
            await ws.send_text(msg)
        except Exception:
            disconnected.append(ws)
    for ws in disconnected:
        connected_clients.remove(ws)


async def broadcast_frame(frame: DisplayList) -> None:
    await broadcast_text(frame.to_message())


def snapshot() -> dict:
    """Current state, readout and field sizes."""
    return {
        "state": weather_state.as_dict(),
        "readout": binding.readout(),
        "viewport": {"width": viewport.width, "height": viewport.height},
        "particles": len(particle_field),
        "precipitation_kind": particle_field.kind,
        "clouds": len(cloud_field),
        "frames": animation.frames,
        "loop": animation.status,
    }


# Serve static files
app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")


@app.get("/")
async def index():
    return FileResponse(os.path.join(STATIC_DIR, "index.html"))


@app.get("/api/parameters")
async def get_parameters():
    """Return the slider descriptors."""
    return ParameterBinding.parameters


@app.get("/api/state")
async def get_state():
    return snapshot()


@app.websocket("/ws")
async def websocket_endpoint(ws: WebSocket):
    await ws.accept()
    connected_clients.append(ws)
    print(f"[WS] Client connected. Total: {len(connected_clients)}")

    # Send initial state
    await ws.send_text(json.dumps({
        "type": "init",
        "parameters": ParameterBinding.parameters,
        "state": weather_state.as_dict(),
        "readout": binding.readout(),
        "viewport": {"width": viewport.width, "height": viewport.height},
        "frame_rate": animation.frame_rate,
    }))

    try:
        while True:
            msg = await ws.receive_text()
            try:
                data = json.loads(msg)
            except json.JSONDecodeError:
                print(f"[WS] Ignoring malformed message: {msg[:80]!r}")
                continue

            if data.get("type") == "set_param":
                name = data.get("name")
                value = data.get("value")
                if name is None or value is None:
                    continue
                try:
                    readout = binding.set_param(name, float(value))
                except (KeyError, TypeError, ValueError, OverflowError) as e:
                    print(f"[WS] Rejected set_param {name!r}={value!r}: {e}")
                    continue
                await broadcast_text({
                    "type": "readout",
                    "state": weather_state.as_dict(),
                    "readout": readout,
                })

            elif data.get("type") == "resize":
                try:
                    resized = binding.resize(data.get("width", 0), data.get("height", 0))
                except (TypeError, ValueError, OverflowError) as e:
                    print(f"[WS] Rejected resize: {e}")
                    continue
                if resized:
                    print(f"[WS] Canvas resized to {viewport.width}x{viewport.height}")
                    await broadcast_text({
                        "type": "readout",
                        "state": weather_state.as_dict(),
                        "readout": binding.readout(),
                        "viewport": {"width": viewport.width, "height": viewport.height},
                    })

    except WebSocketDisconnect:
        pass
    except Exception as e:
        print(f"[WS] Error: {e}")
    finally:
        if ws in connected_clients:
            connected_clients.remove(ws)
        print(f"[WS] Client disconnected. Total: {len(connected_clients)}")


def main():
    import uvicorn
    port = int(os.environ.get("PORT", 8000))
    uvicorn.run("server:app", host="0.0.0.0", port=port, reload=False)


if __name__ == "__main__":
    main()

"""
Manual smoke check for the live ISS WebSocket stream.

Starts a temporary backend when none is listening, reads a few frames from
/ws/iss and prints them.
"""
import asyncio
import json
import os
import subprocess
import sys
import time

import httpx
import websockets

PORT = int(os.getenv("COSMIC_ATLAS_PORT", "3001"))
WS_URL = f"ws://127.0.0.1:{PORT}/ws/iss"
HTTP_URL = f"http://127.0.0.1:{PORT}/health"


def check_backend() -> bool:
    try:
        r = httpx.get(HTTP_URL, timeout=2)
        return r.status_code == 200
    except httpx.HTTPError:
        return False


def start_backend():
    print("Starting temporary backend...")
    p = subprocess.Popen(
        [sys.executable, "-m", "uvicorn", "cosmic_atlas.main:app", "--host", "127.0.0.1", "--port", str(PORT)],
        cwd=os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "backend"),
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
    )
    for _ in range(20):
        if check_backend():
            print("Backend started.")
            return p
        time.sleep(1)
    print("Backend failed to start.")
    p.terminate()
    return None


async def read_frames(count: int = 3) -> bool:
    print(f"Connecting to {WS_URL}...")
    async with websockets.connect(WS_URL) as websocket:
        await websocket.send(json.dumps({"interval": 2}))
        for i in range(count):
            frame = json.loads(await asyncio.wait_for(websocket.recv(), timeout=10.0))
            print(f"\nFrame #{i + 1}: {frame.get('type')}")
            if frame.get("type") == "error":
                print(f"  {frame['error']['code']}: {frame['error']['message']}")
                return False
            pos = frame["data"]
            print(f"  Lat: {pos['latitude']:.4f}  Lon: {pos['longitude']:.4f}")
            print(f"  Alt: {pos['altitude']:.1f} km  Cached: {frame['metadata']['cached']}")
    return True


if __name__ == "__main__":
    server_process = None
    if not check_backend():
        server_process = start_backend()

    ok = False
    if check_backend():
        ok = asyncio.run(read_frames())
        print("\nISS stream check PASSED." if ok else "\nISS stream check FAILED.")
    else:
        print("Could not connect to backend.")

    if server_process:
        print("Stopping temporary backend...")
        server_process.terminate()
    sys.exit(0 if ok else 1)

"""
Example: async submission of a remotely hosted audio file.

Environment variables:
- SPEECH_ENDPOINT_URL (e.g., https://api.example.com)
- SPEECH_GATEWAY_TOKEN
- SPEECH_LANGUAGE (optional, defaults to 'en')

Usage: python transcribe_link_async.py https://example.com/audio.mp3
"""
import asyncio
import os
import sys

from speech_gateway import SpeechClient


async def main() -> None:
    if len(sys.argv) != 2:
        raise SystemExit("Usage: transcribe_link_async.py AUDIO_URL")
    endpoint = os.environ.get("SPEECH_ENDPOINT_URL")
    token = os.environ.get("SPEECH_GATEWAY_TOKEN")
    if not (endpoint and token):
        raise SystemExit("Set SPEECH_ENDPOINT_URL and SPEECH_GATEWAY_TOKEN.")

    async with SpeechClient(endpoint, token) as client:
        result = await client.process_link_async(os.environ.get("SPEECH_LANGUAGE", "en"), sys.argv[1])

    print(f"Request {result['meta']['requestId']}: {result['data']}")


if __name__ == "__main__":
    asyncio.run(main())

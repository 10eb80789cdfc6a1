"""
Example: upload a local audio file, or poll a job token from an earlier upload.

Environment variables:
- SPEECH_ENDPOINT_URL (e.g., https://api.example.com)
- SPEECH_GATEWAY_TOKEN
- SPEECH_LANGUAGE (optional, defaults to 'en')

Usage:
    python transcribe_file.py path/to/audio.wav
    python transcribe_file.py --check JOB_TOKEN
"""
import logging
import os
import sys

from speech_gateway import ClientError, SpeechClient


def main() -> None:
    args = sys.argv[1:]
    if len(args) not in (1, 2) or (len(args) == 2 and args[0] != "--check"):
        raise SystemExit("Usage: transcribe_file.py AUDIO_FILE | --check JOB_TOKEN")
    endpoint = os.environ.get("SPEECH_ENDPOINT_URL")
    token = os.environ.get("SPEECH_GATEWAY_TOKEN")
    if not (endpoint and token):
        raise SystemExit("Set SPEECH_ENDPOINT_URL and SPEECH_GATEWAY_TOKEN.")
    logging.basicConfig(level=logging.DEBUG)

    with SpeechClient(endpoint, token, timeout=60.0) as client:
        try:
            if len(args) == 2:
                result = client.check_result(args[1])
            else:
                result = client.send_file(os.environ.get("SPEECH_LANGUAGE", "en"), args[0])
        except ClientError as exc:
            raise SystemExit(str(exc))

    print(f"Request {result['meta']['requestId']} ({result['meta']['shamsiDate']}): {result['data']}")


if __name__ == "__main__":
    main()

import argparse
import asyncio
import sys

import httpx

from r2_uploader.client.orchestrator import SelectedFile, UploadOrchestrator


def _print_progress(orchestrator: UploadOrchestrator) -> None:
    if orchestrator.status:
        print(f"[{orchestrator.progress:3d}%] {orchestrator.status}")


async def upload(path: str, mode: str, base_url: str, timeout: float) -> int:
    async with httpx.AsyncClient(base_url=base_url, timeout=timeout) as http_client:
        orchestrator = UploadOrchestrator(http_client, on_change=_print_progress)
        orchestrator.select_file(SelectedFile.from_path(path))
        if mode == "server":
            outcome = await orchestrator.upload_via_server()
        else:
            outcome = await orchestrator.upload_via_presigned_url()

    if outcome is None:
        print(orchestrator.error, file=sys.stderr)
        return 1

    print(outcome.message)
    print(f"URL: {outcome.video_url}")
    if outcome.filename:
        print(f"Filename: {outcome.filename}")
    if outcome.size:
        print(f"Size: {outcome.size / 1024 / 1024:.2f} MB")
    if outcome.content_type:
        print(f"Type: {outcome.content_type}")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="python -m r2_uploader.client",
        description="Upload a file to Cloudflare R2 through the uploader API.",
    )
    parser.add_argument("file", help="path of the file to upload")
    parser.add_argument(
        "--mode",
        choices=("server", "direct"),
        default="server",
        help="relay through the server or PUT directly with a presigned URL",
    )
    parser.add_argument("--base-url", default="http://localhost:8000", help="uploader API address")
    parser.add_argument("--timeout", type=float, default=300.0, help="request timeout in seconds")
    args = parser.parse_args(argv)

    return asyncio.run(upload(args.file, args.mode, args.base_url, args.timeout))


if __name__ == "__main__":
    sys.exit(main())

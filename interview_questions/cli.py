#!/usr/bin/env python3
"""
Command-line interface for the interview question service.

Runs the API server, or talks to a running one: browse questions, manage
templates, hear a question spoken and answer it by voice.
"""

import argparse
import asyncio
import json
import os
import sys
from pathlib import Path
from typing import Any, List, Optional

from interview_questions.client.api_client import InterviewApiClient
from interview_questions.client.speech_client import NOTICE_MESSAGES, SpeechClient
from interview_questions.core.config import get_settings
from interview_questions.core.errors import ServiceError
from interview_questions.playback.errors import PlaybackError

DEFAULT_BASE_URL = "http://localhost:8000"


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="interview-questions",
        description="Interview question generator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  interview-questions serve
  interview-questions questions --type technical --difficulty medium
  interview-questions templates create "Backend screen"
  interview-questions templates export <template-id> -o screen.txt
  interview-questions speak "Tell me about yourself" --voice nova
        """
    )
    parser.add_argument(
        "--base-url",
        default=os.environ.get("INTERVIEW_API_URL", DEFAULT_BASE_URL),
        help="Base URL of a running service (default: $INTERVIEW_API_URL or %(default)s)"
    )
    parser.add_argument(
        "--api-key",
        default=os.environ.get("INTERVIEW_API_KEY"),
        help="Key sent as the apikey header"
    )
    parser.add_argument(
        "--version",
        action="version",
        version="%(prog)s 1.0.0"
    )

    commands = parser.add_subparsers(dest="command", required=True)

    serve = commands.add_parser("serve", help="Run the API server")
    serve.add_argument("--host", default="0.0.0.0")
    serve.add_argument("--port", type=int, default=8000)

    questions = commands.add_parser("questions", help="Draw random questions")
    questions.add_argument("--type", dest="question_type", required=True)
    questions.add_argument("--difficulty", required=True)
    questions.add_argument("--count", type=int, default=2)

    commands.add_parser("job-descriptions", help="List job descriptions")

    job_questions = commands.add_parser("job-questions", help="Questions tailored to a job description")
    job_questions.add_argument("job_description_id")

    templates = commands.add_parser("templates", help="Manage question templates")
    template_commands = templates.add_subparsers(dest="template_command", required=True)
    template_commands.add_parser("list", help="List templates")
    create = template_commands.add_parser("create", help="Create a template")
    create.add_argument("name")
    create.add_argument("--description")
    show = template_commands.add_parser("questions", help="Show a template's questions")
    show.add_argument("template_id")
    add = template_commands.add_parser("add", help="Add a question to a template")
    add.add_argument("template_id")
    add.add_argument("question_id")
    add.add_argument("order_index", type=int)
    export = template_commands.add_parser("export", help="Export a template as text")
    export.add_argument("template_id")
    export.add_argument("-o", "--output", type=Path, help="Output file path (default: stdout)")

    speak = commands.add_parser("speak", help="Speak text through the sound card")
    speak.add_argument("text")
    speak.add_argument("--voice")

    answer = commands.add_parser("answer", help="Record a spoken answer and get feedback")
    answer.add_argument("question_id")
    answer.add_argument("--question-text", required=True)
    answer.add_argument("--type", dest="question_type")
    answer.add_argument("--seconds", type=float, default=30.0, help="Recording length")
    answer.add_argument("--save", action="store_true", help="Store the transcript and feedback")

    return parser.parse_args(argv)


def format_questions(questions: List[dict]) -> str:
    if not questions:
        return "No questions found"
    lines = []
    for i, question in enumerate(questions, 1):
        lines.append(f"{i}. [{str(question.get('type', '')).upper()}] {question['text']}")
        lines.append(f"   id: {question['id']}  difficulty: {question.get('difficulty')}")
    return "\n".join(lines)


def write_output(content: str, output_path: Optional[Path]) -> None:
    """Write content to file or stdout."""
    if output_path:
        with open(output_path, "w", encoding="utf-8") as f:
            f.write(content)
        print(f"Output written to '{output_path}'")
    else:
        print(content)


def _print_json(data: Any) -> None:
    print(json.dumps(data, indent=2, default=str))


async def _speak(api: InterviewApiClient, args: argparse.Namespace) -> int:
    from interview_questions.media.media_service import MediaService
    from interview_questions.playback.audio_player import AudioPlayer
    from interview_questions.playback.retry import RetryPolicy
    from interview_questions.playback.speech_playback import PlaybackStatus, SpeechPlayback

    settings = get_settings()
    media = MediaService().create("pyaudio")
    player = AudioPlayer(media, ready_timeout=settings.playback_ready_timeout)
    playback = SpeechPlayback(
        SpeechClient(api, default_voice=settings.tts_default_voice),
        player,
        RetryPolicy.from_settings(settings),
    )
    try:
        result = await playback.speak(args.text, args.voice)
    finally:
        await player.close()

    if result.status is PlaybackStatus.NOTIFIED and result.notice is not None:
        print(NOTICE_MESSAGES[result.notice], file=sys.stderr)
    elif not result.ok:
        print(f"Playback {result.status.value}: {result.error}", file=sys.stderr)
    return 0 if result.ok else 1


async def _answer(api: InterviewApiClient, args: argparse.Namespace) -> int:
    from interview_questions.capture.voice_recorder import VoiceAnswerRecorder
    from interview_questions.media.media_service import MediaService

    media = MediaService().create("pyaudio")
    recorder = VoiceAnswerRecorder(
        api,
        media,
        question_id=args.question_id,
        question_text=args.question_text,
        question_type=args.question_type,
        save_response=args.save,
    )
    try:
        await recorder.start()
        print(f"Recording for {args.seconds:g} seconds...", file=sys.stderr)
        await asyncio.sleep(args.seconds)
        result = await recorder.stop()
    finally:
        recorder.close()

    print("Transcript:")
    print(result.transcript)
    print()
    print("Feedback:")
    print(result.feedback)
    return 0


async def run_command(args: argparse.Namespace) -> int:
    async with InterviewApiClient(args.base_url, api_key=args.api_key) as api:
        if args.command == "questions":
            questions = await api.generate_questions(args.question_type, args.difficulty, args.count)
            print(format_questions(questions))
        elif args.command == "job-descriptions":
            _print_json(await api.fetch_job_descriptions())
        elif args.command == "job-questions":
            questions = await api.generate_custom_questions(job_description_id=args.job_description_id)
            print(format_questions(questions))
        elif args.command == "templates":
            if args.template_command == "list":
                _print_json(await api.fetch_templates())
            elif args.template_command == "create":
                _print_json(await api.create_template(args.name, args.description))
            elif args.template_command == "questions":
                print(format_questions(await api.fetch_template_questions(args.template_id)))
            elif args.template_command == "add":
                _print_json(await api.add_question_to_template(
                    args.template_id, args.question_id, args.order_index
                ))
            elif args.template_command == "export":
                write_output(await api.export_template(args.template_id), args.output)
        elif args.command == "speak":
            return await _speak(api, args)
        elif args.command == "answer":
            return await _answer(api, args)
    return 0


def main(argv: Optional[List[str]] = None) -> None:
    """Main CLI entry point."""
    args = parse_args(argv)

    if args.command == "serve":
        import uvicorn

        uvicorn.run(
            "interview_questions.main:create_app",
            factory=True,
            host=args.host,
            port=args.port,
            log_config=None
        )
        return

    try:
        code = asyncio.run(run_command(args))
    except ServiceError as e:
        print(f"Error ({e.code}): {e.message}", file=sys.stderr)
        if e.detail:
            print(e.detail, file=sys.stderr)
        sys.exit(1)
    except PlaybackError as e:
        print(f"Audio error: {e}", file=sys.stderr)
        sys.exit(1)
    sys.exit(code)


if __name__ == "__main__":
    main()

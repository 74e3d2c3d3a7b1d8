#!/usr/bin/env python3
"""
MockView - Main Entry Point.

Usage:
    python main.py                          # Run the FastAPI server
    python main.py --cli                    # Run a mock interview in the terminal
    python main.py --cli --role "Data Scientist" --adaptive --user me
"""

import argparse
import asyncio
import logging
import os
import sys
from pathlib import Path


def setup_python_path():
    """Add project root to Python path."""
    project_root = Path(__file__).parent
    if str(project_root) not in sys.path:
        sys.path.insert(0, str(project_root))


def run_server(host: str = None, port: int = None):
    """Launch the FastAPI server with uvicorn."""
    import uvicorn
    from src.core.config import configure_logging

    configure_logging()

    if host is None:
        host = os.getenv("HOST", "127.0.0.1")
    if port is None:
        port = int(os.getenv("PORT", "8000"))

    print("\n" + "=" * 60)
    print("🎙️  MockView - Interview Practice API")
    print("=" * 60)
    print(f"\n🌐 API: http://{host}:{port}")
    print(f"📚 API Docs: http://{host}:{port}/api/docs")
    print("\nPress Ctrl+C to stop the server\n")

    uvicorn.run(
        "src.api.app:app",
        host=host,
        port=port,
        workers=1,
        log_level="info",
        access_log=False,
    )


async def run_cli_demo(role: str, user_id: str, adaptive: bool, count: int):
    """Run an interview in the terminal."""
    setup_python_path()

    from src.core.config import configure_logging
    from src.core.domain.models import InterviewState
    from src.core.exceptions import InterviewAIError
    from src.app.orchestrator import create_orchestrator

    configure_logging()
    logger = logging.getLogger(__name__)

    print("\n" + "=" * 60)
    print(f"🎙️  MockView - {role} Interview")
    print("=" * 60 + "\n")

    orchestrator = create_orchestrator()

    try:
        session_id = orchestrator.start_session(
            role, user_id=user_id, count=count, adaptive=adaptive,
        )
        print(f"🚀 Session started: {session_id}\n")

        while orchestrator.state == InterviewState.QUESTIONING:
            number, total = orchestrator.progress
            question = orchestrator.current_question

            print(f"🎯 Question {number} of {total} [{question.difficulty.value} · {question.category}]")
            print(f"   {question.question}")
            print(f"   ({question.context})\n")

            answer = input("💬 Your answer (Enter to skip): ").strip()
            if not answer:
                orchestrator.skip_question()
                print("   Skipped.\n")
                continue

            print("\n⏳ Scoring...")
            record = await orchestrator.submit_answer(answer)
            print(f"\n⭐ Score: {record.score}/10")
            print(f"   {record.feedback}\n")
            if question.follow_up:
                print("   Follow-ups to think about:")
                for follow_up in question.follow_up:
                    print(f"   - {follow_up}")
            print("-" * 60 + "\n")

        summary = orchestrator.end_session()
        print("=" * 60)
        print("🏁 Session Complete!")
        print(f"   Answered: {summary.answered_questions}/{summary.total_questions}")
        print(f"   Average score: {summary.average_score}/10")
        print(f"   Duration: {summary.duration_minutes:.1f} min")
        print("=" * 60 + "\n")

    except InterviewAIError as e:
        logger.error(f"Demo error: {e}")
        print(f"\n❌ Error: {e}")


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="MockView - Interview Practice"
    )
    parser.add_argument(
        "--cli",
        action="store_true",
        help="Run an interview in the terminal instead of the web server",
    )
    parser.add_argument(
        "--role",
        default="Backend Developer",
        help="Role to interview for in CLI mode",
    )
    parser.add_argument(
        "--user",
        default="cli",
        help="User ID under which answers are stored in CLI mode",
    )
    parser.add_argument(
        "--adaptive",
        action="store_true",
        help="Adapt question difficulty to previously stored scores",
    )
    parser.add_argument(
        "--count",
        type=int,
        default=5,
        help="Number of questions in CLI mode",
    )
    parser.add_argument(
        "--host",
        default=None,
        help="Host to bind the server (default: $HOST or 127.0.0.1)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to bind the server (default: $PORT or 8000)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    args = parser.parse_args()

    setup_python_path()

    if args.debug:
        os.environ["LOG_LEVEL"] = "DEBUG"

    if args.cli:
        asyncio.run(run_cli_demo(args.role, args.user, args.adaptive, args.count))
    else:
        run_server(host=args.host, port=args.port)


if __name__ == "__main__":
    main()

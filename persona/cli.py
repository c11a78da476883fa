#!/usr/bin/env python
"""
CLI entry point for persona agents.
Configure an agent from the terminal and chat with it.
"""

import argparse
import asyncio
import sys

from persona.adapters.base import Invoker
from persona.adapters.langchain_invoker import LangChainInvoker
from persona.config import load_settings, require_credentials
from persona.conversation import stream_conversation
from persona.errors import MessageMissing, StartupConfigurationMissing
from persona.logging_config import setup_logging
from persona.models.agent import (
    DEFAULT_INSTRUCTIONS,
    DEFAULT_MAX_MEMORY_MESSAGES,
    DEFAULT_MODEL,
    DEFAULT_PERSONALITY,
    AgentConfig,
    AgentDefinition,
)
from persona.models.session import Session
from persona.registry import AgentRegistry
from persona.relay import CHUNK, DONE
from persona.sessions import resolve_session

DEMO_NAME = "Demo Agent"
EXIT_WORDS = ("exit", "quit")


def ask(question: str, default: str | None = None) -> str:
    """Prompt once; an empty answer returns the default."""
    answer = input(question).strip()
    return answer or (default or "")


def parse_max_memory(raw: str | None) -> int:
    """Parse the memory bound, falling back to the default on bad input."""
    if not raw:
        return DEFAULT_MAX_MEMORY_MESSAGES
    try:
        value = int(raw)
    except ValueError:
        print(f"Not a number: {raw!r}, using {DEFAULT_MAX_MEMORY_MESSAGES}")
        return DEFAULT_MAX_MEMORY_MESSAGES
    if value <= 0:
        print(f"Must be positive, using {DEFAULT_MAX_MEMORY_MESSAGES}")
        return DEFAULT_MAX_MEMORY_MESSAGES
    return value


def collect_config(
    args: argparse.Namespace,
    interactive: bool,
    default_model: str = DEFAULT_MODEL,
) -> AgentConfig:
    """Build an AgentConfig from flags, prompting for whatever is missing.

    A blank model answer leaves the model unset so the registry default applies.
    """
    name = args.name
    instructions = args.instructions
    personality = args.personality
    max_memory = args.max_memory
    model = args.model

    if interactive:
        if name is None:
            name = ask("Enter agent name: ", DEMO_NAME)
        if instructions is None:
            instructions = ask("Enter instructions: ", DEFAULT_INSTRUCTIONS)
        if personality is None:
            personality = ask(
                "Enter personality (friendly, formal, technical, neutral): ",
                DEFAULT_PERSONALITY,
            )
        if max_memory is None:
            max_memory = ask(f"Enter maximum memory messages (default: {DEFAULT_MAX_MEMORY_MESSAGES}): ")
        if model is None:
            model = ask(f"Enter model (default: {default_model}): ")

    return AgentConfig(
        name=name or DEMO_NAME,
        instructions=instructions,
        personality=personality,
        model=model or None,
        max_memory_messages=parse_max_memory(max_memory),
    )


def print_agent(definition: AgentDefinition) -> None:
    print("\nAgent created successfully!\n")
    print(f"ID: {definition.identity}")
    print(f"Name: {definition.name}")
    print(f"Instructions: {definition.instructions}")
    print(f"Personality: {definition.personality}")
    print(f"Model: {definition.model}")
    print(f"Max Memory Messages: {definition.max_memory_messages}")


async def stream_turn(
    definition: AgentDefinition,
    message: str,
    session: Session,
    invoker: Invoker,
) -> bool:
    """Print one reply as it streams in; returns False if the turn failed."""
    print(f"\n{definition.name}: ")
    succeeded = False
    async for event in stream_conversation(definition, message, session, invoker):
        if event.kind == CHUNK:
            sys.stdout.write(event.text)
            sys.stdout.flush()
        elif event.kind == DONE:
            succeeded = True
        else:
            print(f"\n{event.text}")
    print("\n")
    return succeeded


def print_session(session: Session) -> None:
    print(f"Thread ID: {session.thread_id}")
    print(f"Resource ID: {session.resource_id}")


async def interactive_mode(definition: AgentDefinition, session: Session, invoker: Invoker) -> None:
    """Run the chat loop until the user types exit."""
    print("\n=== Starting Conversation ===\n")
    print_session(session)

    message_count = 0
    while True:
        message = (await asyncio.to_thread(input, '\nEnter your message (or type "exit" to quit): ')).strip()

        if message.lower() in EXIT_WORDS:
            break

        if not message:
            print("Please enter a message.")
            continue

        message_count += 1
        print("\nProcessing...")
        await stream_turn(definition, message, session, invoker)

        print(f"Message {message_count} processed.")
        print_session(session)

    print("\nThank you for using Persona Agents!")


def main(argv: list[str] | None = None, invoker: Invoker | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Persona Agents - create a personalized agent and chat with it",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Prompt for the configuration, then chat
  persona-chat

  # Skip the prompts
  persona-chat --name "Friendly Bot" --personality friendly

  # Single message
  persona-chat --name Helper --message "What can you do?"
""",
    )
    parser.add_argument("--name", "-n", type=str, help="Agent name")
    parser.add_argument("--instructions", "-i", type=str, help="Behavior instructions")
    parser.add_argument("--personality", "-p", type=str, help="Tone, e.g. friendly or formal")
    parser.add_argument("--model", "-m", type=str, help="Model identifier")
    parser.add_argument("--max-memory", type=str, help="Maximum remembered messages")
    parser.add_argument("--message", type=str, help="Send one message and exit")
    parser.add_argument("--thread-id", type=str, help="Resume an existing thread")
    parser.add_argument("--resource-id", type=str, help="Resource (user) id")
    args = parser.parse_args(argv)

    settings = load_settings()
    setup_logging(settings.log_level)

    if invoker is None:
        try:
            require_credentials(settings)
        except StartupConfigurationMissing as e:
            print(str(e), file=sys.stderr)
            return 1
        invoker = LangChainInvoker(api_key=settings.groq_api_key, base_url=settings.groq_base_url)

    print("\n=== Persona Agents: Personalized Agent Demo ===\n")

    config = collect_config(args, interactive=args.message is None, default_model=settings.default_model)
    print("\nCreating your personalized agent...")
    registry = AgentRegistry(settings.default_model)
    definition = registry.create(config)
    print_agent(definition)

    session = resolve_session(args.thread_id, args.resource_id)

    if args.message is not None:
        if not args.message.strip():
            print(MessageMissing().message, file=sys.stderr)
            return 1
        succeeded = asyncio.run(stream_turn(definition, args.message, session, invoker))
        print_session(session)
        return 0 if succeeded else 1

    try:
        asyncio.run(interactive_mode(definition, session, invoker))
    except (KeyboardInterrupt, EOFError):
        print("\nGoodbye!")
    return 0


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()

#!/usr/bin/env python3
# =============================================================================
# scripts/contacts_interactive.py - Interactive Contact Manager
# =============================================================================
# A terminal front-end for the Contacts API. Shows the contact list and a
# form that switches between "Add Contact" and "Update Contact".
#
# Usage:
#   uvicorn app.main:app                        # in another terminal
#   python scripts/contacts_interactive.py      # uses CONTACTS_API_URL
#   python scripts/contacts_interactive.py http://localhost:8000
#
# Commands:
#   /list          - Refetch and show all contacts
#   /add           - Fill in the form and create a contact
#   /edit <id>     - Fill in the form pre-populated from a contact and update it
#   /delete <id>   - Delete a contact
#   /reset         - Leave edit mode and clear the form
#   /help          - Show help
#   /quit or /exit - Exit
# =============================================================================

import asyncio
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.config import settings
from client.api import ContactsApiClient
from client.form import ContactForm, ValidationTrigger
from client.manager import ContactManager
from core.validation import FIELD_LABELS, FIELD_ORDER


def print_header(base_url: str):
    print("\n" + "=" * 60)
    print("  Contact Manager")
    print("=" * 60)
    print(f"  API: {base_url}")
    print("  Type /help for commands")
    print("=" * 60 + "\n")


def print_help():
    print("""
  Commands:
    /list          Refetch and show all contacts
    /add           Create a contact
    /edit <id>     Update a contact
    /delete <id>   Delete a contact
    /reset         Leave edit mode and clear the form
    /quit          Exit
""")


def print_contacts(manager: ContactManager):
    if not manager.contacts:
        print("\n  No contacts yet. Use /add to create one.\n")
        return

    print()
    for contact in manager.contacts:
        print(f"  [{contact.id}] {contact.firstName} {contact.lastName}")
        print(f"      Email: {contact.email}")
        print(f"      Phone: {contact.phoneNumber}")
        print(f"      Age:   {contact.age}")
    print()


def print_error(manager: ContactManager):
    if manager.last_error:
        print(f"\n  Error: {manager.last_error}\n")


def fill_form(form: ContactForm):
    """Prompt for each field, re-asking until the field passes its checks."""
    print(f"\n  {form.submit_label}  (press Enter to keep the current value)\n")
    for name in FIELD_ORDER:
        current = form.values[name]
        while True:
            raw = input(f"  {FIELD_LABELS[name]} [{current}]: ").strip()
            if raw:
                form.set_field(name, raw)
            form.blur(name)
            if name not in form.errors:
                break
            print(f"    ! {form.errors[name]}")


def parse_id(argument: str):
    try:
        return int(argument)
    except ValueError:
        print(f"\n  Not a contact id: {argument}\n")
        return None


async def run(base_url: str):
    print_header(base_url)

    async with ContactsApiClient(base_url) as api:
        manager = ContactManager(api, ContactForm(
            rules=settings.contact_rules,
            trigger=ValidationTrigger.ON_BLUR,
        ))

        # Fetch on mount
        if await manager.load():
            print_contacts(manager)
        else:
            print_error(manager)

        while True:
            try:
                user_input = input("contacts> ").strip()
            except (KeyboardInterrupt, EOFError):
                print("\n\nGoodbye!\n")
                break

            if not user_input:
                continue

            command, _, argument = user_input.partition(" ")
            command = command.lower()
            argument = argument.strip()

            if command in ["/quit", "/exit", "/q"]:
                print("\nGoodbye!\n")
                break

            if command == "/help":
                print_help()
                continue

            if command == "/list":
                if await manager.load():
                    print_contacts(manager)
                else:
                    print_error(manager)
                continue

            if command == "/reset":
                manager.cancel_edit()
                print("\n  Form cleared.\n")
                continue

            if command == "/add":
                manager.cancel_edit()
            elif command == "/edit":
                contact_id = parse_id(argument)
                if contact_id is None:
                    continue
                if not manager.edit(contact_id):
                    print_error(manager)
                    continue
            elif command == "/delete":
                contact_id = parse_id(argument)
                if contact_id is None:
                    continue
                if await manager.delete(contact_id):
                    print(f"\n  Deleted contact {contact_id}.")
                    print_contacts(manager)
                else:
                    print_error(manager)
                continue
            else:
                print(f"\n  Unknown command: {command}. Type /help for commands.\n")
                continue

            # /add and /edit both end in a form submit
            fill_form(manager.form)
            if await manager.submit():
                print("\n  Saved.")
                print_contacts(manager)
            else:
                if manager.form.form_error:
                    print(f"\n  Error: {manager.form.form_error}\n")
                else:
                    print_error(manager)


def main():
    base_url = sys.argv[1] if len(sys.argv) > 1 else settings.CONTACTS_API_URL
    asyncio.run(run(base_url))


if __name__ == "__main__":
    main()

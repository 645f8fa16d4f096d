#!/usr/bin/env python3
"""
AutoStudio - Admin Setup Script
Creates an admin member and prints its access key and magic link
"""
import sys
import os

# Add the app to the path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

# Load environment variables
from dotenv import load_dotenv
load_dotenv()


def main():
    print("""
╔══════════════════════════════════════════════════════════════╗
║            AutoStudio - Admin Setup                          ║
╚══════════════════════════════════════════════════════════════╝
    """)

    print("Create an admin member:\n")

    name = input("Name: ").strip()
    email = input("Email: ").strip()

    try:
        from autostudio import create_app
        from autostudio.services.errors import ValidationError
        from autostudio.services.state import StudioState

        app = create_app()
        state: StudioState = app.extensions['autostudio']

        try:
            member = state.members.add(name, email, 'Admin')
        except ValidationError as e:
            print(f"\n❌ {e.message}")
            sys.exit(1)

        base_url = os.environ.get('STUDIO_URL', 'http://localhost:5000/')
        print(f"""
╔══════════════════════════════════════════════════════════════╗
║                    ✅ SUCCESS!                               ║
╠══════════════════════════════════════════════════════════════╣
  Admin member created.

  Email:       {member.email}
  Member ID:   {member.id}
  Access key:  {member.access_key}
  Magic link:  {base_url}?key={member.access_key}

  Start the server with:
    python run.py
╚══════════════════════════════════════════════════════════════╝
        """)

    except ImportError as e:
        print(f"\n❌ Import error: {e}")
        print("\nMake sure you've installed dependencies:")
        print("  pip install -e .")
        sys.exit(1)


if __name__ == '__main__':
    main()

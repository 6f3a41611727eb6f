"""Management command to create a back-office user with starting access."""

import getpass

from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError
from django.core.management.base import BaseCommand, CommandError

from django_cms_accounts.roles import SystemRole
from django_cms_accounts.services import create_first, has_role


class Command(BaseCommand):
    help = 'Create a Refinery user with every menu plugin; the first one becomes Superuser'

    def add_arguments(self, parser):
        parser.add_argument('--username', required=True, help='Username (normalized before saving)')
        parser.add_argument('--email', required=True, help='Email address')
        parser.add_argument('--full-name', default='', help='Display name')
        parser.add_argument(
            '--password',
            help='Password (prompted for when omitted, unless --noinput)',
        )
        parser.add_argument(
            '--noinput',
            '--no-input',
            action='store_false',
            dest='interactive',
            help='Do not prompt; without --password the user gets an unusable password',
        )

    def handle(self, *args, **options):
        User = get_user_model()
        user = User(
            username=options['username'],
            email=options['email'],
            full_name=options['full_name'],
        )

        password = options['password']
        if password is None and options['interactive']:
            password = getpass.getpass('Password: ')
            if password != getpass.getpass('Password (again): '):
                raise CommandError('Passwords do not match')

        if password:
            user.set_password(password)
        else:
            user.set_unusable_password()

        try:
            user.full_clean()
        except ValidationError as e:
            messages = [f'{field}: {" ".join(errors)}' for field, errors in e.message_dict.items()]
            raise CommandError('Invalid user: ' + '; '.join(messages))

        if not create_first(user):
            raise CommandError(f'Could not create user {user.username!r}')

        roles = [role for role in SystemRole if has_role(user, role)]
        self.stdout.write(
            self.style.SUCCESS(
                f'Created user {user.username} with roles: {", ".join(roles)}'
            )
        )

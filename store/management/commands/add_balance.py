from decimal import Decimal, InvalidOperation

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError
from django.db import transaction
from django.db.models import F

from store.activity import log_activity
from store.models import UserAccount


class Command(BaseCommand):
    help = "Credit a user's wallet balance"

    def add_arguments(self, parser):
        parser.add_argument("username", type=str, help="Username of the user")
        parser.add_argument("amount", type=str, help="Amount to add to the balance")

    def handle(self, *args, **kwargs):
        username = kwargs["username"]
        try:
            amount = Decimal(kwargs["amount"])
        except InvalidOperation:
            raise CommandError(f"Invalid amount: {kwargs['amount']}")
        if amount <= 0:
            raise CommandError("Amount must be greater than 0")

        user = get_user_model().objects.filter(username=username).first()
        if user is None:
            raise CommandError(f"User {username} not found")

        with transaction.atomic():
            account, _ = UserAccount.objects.select_for_update().get_or_create(user=user)
            UserAccount.objects.filter(pk=account.pk).update(balance=F("balance") + amount)
            log_activity(user.id, "Added funds to account")
            account.refresh_from_db(fields=["balance"])

        self.stdout.write(self.style.SUCCESS(f"Added {amount} to {username}; balance is now {account.balance}"))

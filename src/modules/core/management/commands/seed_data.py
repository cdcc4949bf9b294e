from __future__ import annotations

import random
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand

from modules.accounts.models import Account, DeliveryAgent
from modules.accounts.repositories import (
    AccountDjangoRepository,
    DeliveryAgentDjangoRepository,
)
from modules.delivery_orders.constants import DeliveryOrderStatus
from modules.delivery_orders.dtos import (
    CoordinatesDTO,
    CreateDeliveryOrderDTO,
    DeliveryInfoDTO,
    ItemInfoDTO,
    ReceiverInfoDTO,
)
from modules.delivery_orders.models import DeliveryOrder
from modules.delivery_orders.repositories import DeliveryOrderDjangoRepository
from modules.delivery_orders.services import DeliveryOrderService

# Each path is replayed through the service, so seeded orders carry the
# same history rows and outbox events as real ones.
LIFECYCLE_PATHS: list[list[tuple[str, str]]] = [
    [],
    [("assign", "")],
    [("assign", ""), ("agent", DeliveryOrderStatus.IN_PROGRESS)],
    [
        ("assign", ""),
        ("agent", DeliveryOrderStatus.IN_PROGRESS),
        ("agent", DeliveryOrderStatus.DELIVERED),
    ],
    [
        ("assign", ""),
        ("agent", DeliveryOrderStatus.IN_PROGRESS),
        ("agent", DeliveryOrderStatus.DELIVERED),
        ("sender", DeliveryOrderStatus.EXCEPTION),
    ],
    [("sender", DeliveryOrderStatus.CANCELED)],
]

LOCATIONS = [
    ("Central Station", 52.3791, 4.9003),
    ("Museum Square", 52.3580, 4.8816),
    ("Harbour Gate", 52.3771, 4.9140),
    ("Market Hall", 52.3676, 4.8979),
    ("North Ferry", 52.3847, 4.9021),
]


class Command(BaseCommand):
    help = "Seed database with development accounts, agents and delivery orders."

    def add_arguments(self, parser):
        parser.add_argument("--orders", type=int, default=12)

    def handle(self, *args, **options):
        random.seed(42)
        self.stdout.write("Seeding development data...")

        users_created = self._seed_users()
        senders, receivers = self._seed_accounts()
        agents = self._seed_agents()
        orders_created = self._seed_orders(senders, receivers, agents, options["orders"])

        self.stdout.write(
            self.style.SUCCESS(
                "Seed completed: "
                f"users={users_created}, "
                f"accounts={Account.objects.count()}, "
                f"delivery_agents={len(agents)}, "
                f"orders={orders_created}"
            )
        )

    def _seed_users(self) -> int:
        User = get_user_model()
        created = 0
        if not User.objects.filter(username="admin").exists():
            User.objects.create_superuser("admin", password="admin123")
            created += 1
        for username in ("sender", "courier", "receiver"):
            if not User.objects.filter(username=username).exists():
                User.objects.create_user(username, password=f"{username}123")
                created += 1
        return created

    def _seed_accounts(self) -> tuple[list[Account], list[Account]]:
        self.stdout.write("Creating accounts...")
        User = get_user_model()
        seed_accounts = [
            ("sender", "Uma Sender", "06-1111 2222", "uma@example.com"),
            ("receiver", "Bea Janssen", "+31 6 1234 5678", "bea@example.com"),
            (None, "Cas de Vries", "0031 20 555 0100", "cas@example.com"),
        ]
        accounts: list[Account] = []
        for username, name, phone, email in seed_accounts:
            user = User.objects.filter(username=username).first() if username else None
            account, _ = Account.objects.get_or_create(
                email=email,
                defaults={"user": user, "name": name, "phone_number": phone},
            )
            accounts.append(account)
        self.stdout.write(self.style.SUCCESS("Creating accounts... Done!"))
        return accounts[:1], accounts[1:]

    def _seed_agents(self) -> list[DeliveryAgent]:
        self.stdout.write("Creating delivery agents...")
        User = get_user_model()
        courier_user = User.objects.filter(username="courier").first()
        seed_agents = [
            (courier_user, "Dirk Courier", "+31 6 9999 0001", "dirk@example.com"),
            (None, "Eva Courier", "+31 6 9999 0002", "eva@example.com"),
        ]
        agents: list[DeliveryAgent] = []
        for user, name, phone, email in seed_agents:
            account, _ = Account.objects.get_or_create(
                email=email,
                defaults={"user": user, "name": name, "phone_number": phone},
            )
            agent, _ = DeliveryAgent.objects.get_or_create(account=account)
            agents.append(agent)
        self.stdout.write(self.style.SUCCESS("Creating delivery agents... Done!"))
        return agents

    def _seed_orders(
        self,
        senders: list[Account],
        receivers: list[Account],
        agents: list[DeliveryAgent],
        count: int,
    ) -> int:
        self.stdout.write("Creating delivery orders...")
        sender = senders[0]
        if sender.user_id is None:
            self.stdout.write(self.style.WARNING("Skipping orders (sender has no user)."))
            return 0
        if DeliveryOrder.objects.filter(sender=sender).exists():
            self.stdout.write(self.style.WARNING("Skipping orders (already seeded)."))
            return 0

        service = DeliveryOrderService(
            order_repository=DeliveryOrderDjangoRepository(),
            account_repository=AccountDjangoRepository(),
            delivery_agent_repository=DeliveryAgentDjangoRepository(),
        )

        for i in range(count):
            (start_name, start_lat, start_lng), (end_name, end_lat, end_lng) = (
                random.sample(LOCATIONS, k=2)
            )
            receiver = receivers[i % len(receivers)]
            is_guest = i % 3 == 0
            dto = CreateDeliveryOrderDTO(
                start_coordinates=CoordinatesDTO(
                    latitude=start_lat, longitude=start_lng, address=start_name
                ),
                end_coordinates=CoordinatesDTO(
                    latitude=end_lat, longitude=end_lng, address=end_name
                ),
                item_info=ItemInfoDTO(
                    length=random.randint(10, 60),
                    width=random.randint(10, 40),
                    height=random.randint(5, 30),
                    weight=round(random.uniform(0.5, 12.0), 1),
                    quantity=random.randint(1, 3),
                    remark=f"Seed order {i + 1}",
                ),
                delivery_info=DeliveryInfoDTO(
                    distance=round(random.uniform(1.0, 15.0), 1),
                    weight=round(random.uniform(0.5, 12.0), 1),
                    price=Decimal(random.randint(500, 4500)) / 100,
                ),
                receiver_info=ReceiverInfoDTO(
                    name=f"Guest {i + 1}",
                    phone_number=f"06{random.randint(10**7, 10**8 - 1)}",
                ),
                receiver_account_id=None if is_guest else str(receiver.id),
            )
            order = service.create_order(sender.user_id, dto)

            agent = agents[i % len(agents)]
            for step, target in LIFECYCLE_PATHS[i % len(LIFECYCLE_PATHS)]:
                if step == "assign":
                    service.assign_delivery_agent(order.id, agent.id)
                elif step == "agent":
                    service.update_status_by_agent(agent.id, order.id, target)
                else:
                    service.update_status_by_sender(order.id, target, sender.id)

        self.stdout.write(self.style.SUCCESS("Creating delivery orders... Done!"))
        return count

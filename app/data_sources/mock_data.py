from app.models.admin.revenue_models import (
    Transaction,
    TransactionType,
    TransactionStatus,
    PaymentMethod,
    TransactionMetadata,
)
from app.models.admin.curated_date_models import (
    CuratedDate,
    CuratedDateStatus,
    DateType,
    DateParticipant,
    DateLocation,
    Genie,
    DateFeedback,
    ParticipantFeedback,
)
from app.utils.date_utils import utc_now
from datetime import datetime, timedelta
from typing import List, Optional
import random

# =====================================
# SEED VALUES
# =====================================

MOCK_USERS = [
    {"id": "u1", "name": "Rahul Sharma", "email": "rahul@example.com"},
    {"id": "u2", "name": "Priya Patel", "email": "priya@example.com"},
    {"id": "u3", "name": "Amit Kumar", "email": "amit@example.com"},
    {"id": "u4", "name": "Sneha Gupta", "email": "sneha@example.com"},
    {"id": "u5", "name": "Vikram Singh", "email": "vikram@example.com"},
]

TRANSACTION_DESCRIPTIONS = {
    TransactionType.SUBSCRIPTION: "Monthly Premium Subscription",
    TransactionType.BONUS: "Referral Bonus",
    TransactionType.REFUND: "Refund for failed date",
}

CITIES = ["Bangalore", "Mumbai", "Delhi", "Chennai", "Pune", "Hyderabad"]

GENIES = [
    {"id": "g1", "name": "Sarah Anderson", "email": "sarah@datifyy.com"},
    {"id": "g2", "name": "Mike Chen", "email": "mike@datifyy.com"},
    {"id": "g3", "name": "Priya Sharma", "email": "priya@datifyy.com"},
]

LOCATIONS = [
    {"name": "The Coffee House", "address": "Indiranagar, 100 Feet Road", "city": "Bangalore"},
    {"name": "Cafe Social", "address": "Koramangala, 5th Block", "city": "Bangalore"},
    {"name": "The Blue Door", "address": "Bandra West", "city": "Mumbai"},
    {"name": "Tea Villa Cafe", "address": "Connaught Place", "city": "Delhi"},
]

USER1_FIRST_NAMES = ["John", "James", "Robert", "Michael"]
USER1_LAST_NAMES = ["Smith", "Johnson", "Williams", "Brown"]
USER2_FIRST_NAMES = ["Emma", "Olivia", "Sophia", "Isabella"]
USER2_LAST_NAMES = ["Davis", "Miller", "Wilson", "Moore"]


# =====================================
# TRANSACTIONS
# =====================================


def generate_mock_transactions(count: int = 100, seed: Optional[int] = None, now: Optional[datetime] = None) -> List[Transaction]:
    """Synthetic payment history spread over the last 60 days"""
    rng = random.Random(seed)
    now = now or utc_now()
    transactions = []

    for i in range(count):
        transaction_type = rng.choice(list(TransactionType))
        if transaction_type == TransactionType.REFUND:
            status = TransactionStatus.REFUNDED
        else:
            status = rng.choice(list(TransactionStatus))
        user = rng.choice(MOCK_USERS)
        created_at = now - timedelta(days=rng.randrange(60))

        base_amount = rng.randrange(500, 5500)
        amount = -base_amount if transaction_type == TransactionType.REFUND else base_amount
        love_tokens = (amount // 100) * 10 if transaction_type == TransactionType.PURCHASE else None
        description = TRANSACTION_DESCRIPTIONS.get(transaction_type) or f"Purchase of {love_tokens} Love Tokens"

        transactions.append(
            Transaction(
                id=f"t{i + 1}",
                transaction_id=f"TXN{i + 1:08d}",
                user_id=user["id"],
                user_name=user["name"],
                user_email=user["email"],
                type=transaction_type,
                amount=amount,
                status=status,
                payment_method=rng.choice(list(PaymentMethod)),
                description=description,
                love_tokens=love_tokens,
                created_at=created_at,
                completed_at=created_at + timedelta(minutes=5) if status == TransactionStatus.COMPLETED else None,
                refunded_at=created_at + timedelta(days=1) if status == TransactionStatus.REFUNDED else None,
                metadata=TransactionMetadata(
                    order_id=f"ORD{i + 1:06d}",
                    subscription_plan="premium" if transaction_type == TransactionType.SUBSCRIPTION else None,
                    promo_code="LOVE20" if rng.random() > 0.7 else None,
                    referral_code="REF123" if transaction_type == TransactionType.BONUS else None,
                ),
            )
        )

    return transactions


# =====================================
# CURATED DATES
# =====================================


def _mock_feedback(rng: random.Random, scheduled_at: datetime, comments: str) -> ParticipantFeedback:
    return ParticipantFeedback(
        rating=rng.randint(3, 5),
        interested=rng.random() > 0.5,
        comments=comments,
        submitted_at=scheduled_at + timedelta(hours=2),
    )


def generate_mock_curated_dates(count: int = 50, seed: Optional[int] = None, now: Optional[datetime] = None) -> List[CuratedDate]:
    """Synthetic curated dates scheduled between 20 days ago and 10 days ahead"""
    rng = random.Random(seed)
    now = now or utc_now()
    dates = []

    for i in range(count):
        status = rng.choice(list(CuratedDateStatus))
        date_type = DateType.ONLINE if rng.random() > 0.5 else DateType.OFFLINE
        city = rng.choice(CITIES)
        has_genie = date_type == DateType.OFFLINE and rng.random() > 0.3
        has_feedback = status == CuratedDateStatus.COMPLETED and rng.random() > 0.2
        scheduled_at = now + timedelta(days=10 - rng.randrange(30))

        user1_number = i * 2 + 1
        user2_number = i * 2 + 2

        feedback = None
        if has_feedback:
            feedback = DateFeedback(
                user1=_mock_feedback(rng, scheduled_at, "Had a great time!"),
                user2=_mock_feedback(rng, scheduled_at, "Nice conversation!"),
            )

        dates.append(
            CuratedDate(
                id=f"cd{i + 1}",
                date_id=f"DATE{i + 1:06d}",
                user1=DateParticipant(
                    id=f"u{user1_number}",
                    first_name=USER1_FIRST_NAMES[i % 4],
                    last_name=USER1_LAST_NAMES[i % 4],
                    email=f"user{user1_number}@example.com",
                    profile_picture=f"https://i.pravatar.cc/150?u={user1_number}",
                    age=25 + rng.randrange(10),
                    city=city,
                ),
                user2=DateParticipant(
                    id=f"u{user2_number}",
                    first_name=USER2_FIRST_NAMES[i % 4],
                    last_name=USER2_LAST_NAMES[i % 4],
                    email=f"user{user2_number}@example.com",
                    profile_picture=f"https://i.pravatar.cc/150?u={user2_number}",
                    age=24 + rng.randrange(10),
                    city=city,
                ),
                date_type=date_type,
                scheduled_at=scheduled_at,
                status=status,
                location=DateLocation(**LOCATIONS[i % len(LOCATIONS)]) if date_type == DateType.OFFLINE else None,
                genie=Genie(**GENIES[i % len(GENIES)]) if has_genie else None,
                feedback=feedback,
                match_score=70 + rng.randrange(30),
                created_at=scheduled_at - timedelta(days=7),
                created_by="Admin User",
                last_updated_at=scheduled_at,
                cancellation_reason="User requested cancellation" if status == CuratedDateStatus.CANCELLED else None,
                notes="Special arrangement requested" if rng.random() > 0.7 else None,
            )
        )

    return dates

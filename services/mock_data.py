"""
Canned dashboard data, served while the collections are still empty.

Timestamps are computed relative to `now` on every call so the mock
dashboard always looks current.
"""
from datetime import datetime, timedelta
from typing import Any, Dict, List


def _avatar(name: str, background: str) -> str:
    return f"https://ui-avatars.com/api/?name={name.replace(' ', '+')}&background={background}&color=fff"


def mock_user_profile(user_type: str, now: datetime) -> Dict[str, Any]:
    if user_type == "brand":
        return {
            "userType": "brand",
            "name": "Acme Inc",
            "email": "contact@acmeinc.com",
            "primaryCategory": "fashion",
            "logo": _avatar("Acme Inc", "0D8ABC"),
            "createdAt": now.isoformat(),
        }
    return {
        "userType": "creator",
        "name": "Sarah Creator",
        "email": "sarah@creator.com",
        "categories": ["fashion", "beauty", "lifestyle"],
        "bio": "Content creator specializing in fashion and lifestyle content",
        "photoURL": _avatar("Sarah Creator", "FF5733"),
        "createdAt": now.isoformat(),
    }


def mock_dashboard_stats(user_type: str) -> Dict[str, Any]:
    if user_type == "brand":
        return {
            "totalMissions": 12,
            "completedMissions": 8,
            "pendingMissions": 2,
            "inProgressMissions": 2,
            "totalCreators": 15,
        }
    return {
        "totalMissions": 8,
        "completedMissions": 6,
        "pendingMissions": 1,
        "inProgressMissions": 1,
        "totalEarnings": 2500,
        "averageRating": 4.8,
        "completionRate": 95,
        "onTimeDeliveryRate": 98,
    }


def mock_missions(now: datetime) -> List[Dict[str, Any]]:
    sarah = {"id": "creator1", "name": "Sarah Creator", "photoURL": _avatar("Sarah Creator", "FF5733")}
    mike = {"id": "creator2", "name": "Mike Vlogger", "photoURL": _avatar("Mike Vlogger", "9C27B0")}
    return [
        {
            "id": "mission1",
            "title": "Summer Collection Showcase",
            "type": "Product Photography",
            "brandId": "brand123",
            "brand": {"name": "Fashion Brand", "photoURL": _avatar("Fashion Brand", "0D8ABC")},
            "assignedTo": sarah,
            "assignedCreators": ["creator1"],
            "deadline": (now + timedelta(days=7)).isoformat(),
            "budget": 500,
            "status": "inProgress",
            "createdAt": now.isoformat(),
        },
        {
            "id": "mission2",
            "title": "Product Unboxing Video",
            "type": "Video Content",
            "brandId": "brand123",
            "brand": {"name": "Tech Company", "photoURL": _avatar("Tech Company", "4CAF50")},
            "assignedTo": mike,
            "assignedCreators": ["creator2"],
            "deadline": (now + timedelta(days=14)).isoformat(),
            "budget": 750,
            "status": "pending",
            "createdAt": (now - timedelta(days=2)).isoformat(),
        },
        {
            "id": "mission3",
            "title": "Lifestyle Integration",
            "type": "Instagram Post",
            "brandId": "brand123",
            "brand": {"name": "Lifestyle Brand", "photoURL": _avatar("Lifestyle Brand", "FF9800")},
            "assignedTo": sarah,
            "assignedCreators": ["creator1"],
            "deadline": (now - timedelta(days=5)).isoformat(),
            "budget": 300,
            "status": "completed",
            "createdAt": (now - timedelta(days=15)).isoformat(),
        },
    ]


def mock_creators() -> List[Dict[str, Any]]:
    return [
        {
            "id": "creator1",
            "firstName": "Sarah",
            "lastName": "Creator",
            "photoURL": _avatar("Sarah Creator", "FF5733"),
            "categories": ["fashion", "beauty", "lifestyle"],
            "skills": ["Photography", "Video Editing", "Storytelling"],
            "bio": "Content creator specializing in fashion and lifestyle content with over 5 years of experience.",
            "rating": 4.8,
        },
        {
            "id": "creator2",
            "firstName": "Mike",
            "lastName": "Vlogger",
            "photoURL": _avatar("Mike Vlogger", "9C27B0"),
            "categories": ["tech", "gaming", "reviews"],
            "skills": ["Video Production", "Tech Reviews", "Unboxing"],
            "bio": "Tech enthusiast and product reviewer with a focus on honest, detailed reviews.",
            "rating": 4.6,
        },
        {
            "id": "creator3",
            "firstName": "Emma",
            "lastName": "Beauty",
            "photoURL": _avatar("Emma Beauty", "E91E63"),
            "categories": ["beauty", "skincare", "makeup"],
            "skills": ["Makeup Tutorials", "Product Reviews", "Before/After"],
            "bio": "Certified makeup artist sharing beauty tips, product reviews, and tutorials.",
            "rating": 4.9,
        },
    ]


def mock_activities(now: datetime) -> List[Dict[str, Any]]:
    entries = [
        ("activity1", "New Mission Created", "You created a new mission: Summer Collection Showcase", timedelta(hours=2)),
        ("activity2", "Mission Accepted", "Sarah Creator accepted your mission: Product Unboxing Video", timedelta(days=1)),
        ("activity3", "Content Delivered", "Mike Vlogger delivered content for: Lifestyle Integration", timedelta(days=3)),
        ("activity4", "Payment Processed", "Payment of $300 processed for: Lifestyle Integration", timedelta(days=4)),
    ]
    return [
        {"id": id_, "userId": "user123", "title": title, "description": description, "timestamp": (now - ago).isoformat()}
        for id_, title, description, ago in entries
    ]


def mock_notifications(now: datetime) -> List[Dict[str, Any]]:
    return [
        {"id": "notif1", "message": "Sarah Creator accepted your mission", "timestamp": (now - timedelta(minutes=30)).isoformat(), "read": False},
        {"id": "notif2", "message": "New content delivered for review", "timestamp": (now - timedelta(hours=3)).isoformat(), "read": False},
        {"id": "notif3", "message": "Payment for mission 'Product Showcase' processed", "timestamp": (now - timedelta(days=1)).isoformat(), "read": True},
    ]


def mock_payments(now: datetime) -> List[Dict[str, Any]]:
    return [
        {"id": "payment1", "missionId": "mission3", "creatorId": "creator1", "amount": 300, "currency": "USD",
         "status": "processed", "createdAt": (now - timedelta(days=5)).isoformat(), "processedAt": (now - timedelta(days=4)).isoformat()},
        {"id": "payment2", "missionId": "mission1", "creatorId": "creator1", "amount": 500, "currency": "USD",
         "status": "pending", "createdAt": (now - timedelta(days=1)).isoformat(), "processedAt": None},
        {"id": "payment3", "missionId": "mission2", "creatorId": "creator2", "amount": 750, "currency": "USD",
         "status": "pending", "createdAt": now.isoformat(), "processedAt": None},
    ]

"""Persistence layer for subscriber data."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from sqlalchemy.orm import Query, Session

from app.domain.entities import User
from app.infrastructure.models import UserModel, UserPreferenceModel
from app.utils import ensure_app_naive_datetime, ensure_app_timezone


class UserRepository:
    """Provide CRUD operations and recipient queries for user entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list(self, skip: int = 0, limit: int | None = 100) -> Sequence[User]:
        query = self.session.query(UserModel).order_by(UserModel.id)
        if skip:
            query = query.offset(skip)
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()]

    def get(self, user_id: int) -> User | None:
        model = self.session.get(UserModel, user_id)
        return self._to_entity(model) if model else None

    def get_by_email(self, email: str) -> User | None:
        model = self.session.query(UserModel).filter(UserModel.email == email).first()
        return self._to_entity(model) if model else None

    def exists_by_email(self, email: str) -> bool:
        return (
            self.session.query(UserModel.id).filter(UserModel.email == email).first()
            is not None
        )

    def create(self, user: User) -> User:
        model = UserModel()
        self._apply_entity_to_model(model, user, include_creation_fields=True)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update(self, user: User) -> User:
        model = self.session.get(UserModel, user.id) if user.id is not None else None
        if not model:
            msg = f"User with id {user.id} not found"
            raise ValueError(msg)
        self._apply_entity_to_model(model, user, include_creation_fields=False)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def delete(self, user_id: int) -> bool:
        model = self.session.get(UserModel, user_id)
        if model is None:
            return False
        self.session.delete(model)
        self.session.commit()
        return True

    def list_active(self) -> Sequence[User]:
        return [self._to_entity(model) for model in self._active_query().all()]

    def list_active_with_preferences(self, tags: Iterable[str]) -> Sequence[User]:
        """Return active users having at least one preference in ``tags``."""

        wanted = sorted(set(tags))
        if not wanted:
            return []
        query = self._active_query().filter(
            UserModel.preferences.any(UserPreferenceModel.preference.in_(wanted))
        )
        return [self._to_entity(model) for model in query.all()]

    def list_active_with_preferences_and_email(self, tags: Iterable[str]) -> Sequence[User]:
        """Like :meth:`list_active_with_preferences`, limited to email subscribers."""

        wanted = sorted(set(tags))
        if not wanted:
            return []
        query = (
            self._active_query()
            .filter(UserModel.email_enabled.is_(True))
            .filter(UserModel.preferences.any(UserPreferenceModel.preference.in_(wanted)))
        )
        return [self._to_entity(model) for model in query.all()]

    def list_active_with_email_enabled(self) -> Sequence[User]:
        query = self._active_query().filter(UserModel.email_enabled.is_(True))
        return [self._to_entity(model) for model in query.all()]

    def list_active_with_sms_enabled(self) -> Sequence[User]:
        query = self._active_query().filter(UserModel.sms_enabled.is_(True))
        return [self._to_entity(model) for model in query.all()]

    def list_active_with_push_enabled(self) -> Sequence[User]:
        query = self._active_query().filter(UserModel.push_enabled.is_(True))
        return [self._to_entity(model) for model in query.all()]

    def _active_query(self) -> Query:
        return (
            self.session.query(UserModel)
            .filter(UserModel.is_active.is_(True))
            .order_by(UserModel.id)
        )

    @staticmethod
    def _to_entity(model: UserModel) -> User:
        return User(
            id=model.id,
            first_name=model.first_name,
            last_name=model.last_name,
            email=model.email,
            phone_number=model.phone_number,
            is_active=model.is_active,
            email_enabled=model.email_enabled,
            sms_enabled=model.sms_enabled,
            push_enabled=model.push_enabled,
            preferences={item.preference for item in model.preferences},
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
        )

    @staticmethod
    def _apply_entity_to_model(
        model: UserModel, user: User, *, include_creation_fields: bool
    ) -> None:
        if include_creation_fields and user.created_at is not None:
            model.created_at = ensure_app_naive_datetime(user.created_at)
        model.first_name = user.first_name
        model.last_name = user.last_name
        model.email = user.email
        model.phone_number = user.phone_number or None
        model.is_active = user.is_active
        model.email_enabled = user.email_enabled
        model.sms_enabled = user.sms_enabled
        model.push_enabled = user.push_enabled

        wanted = {tag for tag in user.preferences if tag}
        for preference in list(model.preferences):
            if preference.preference in wanted:
                wanted.discard(preference.preference)
            else:
                model.preferences.remove(preference)
        for tag in sorted(wanted):
            model.preferences.append(UserPreferenceModel(preference=tag))


__all__ = ["UserRepository"]

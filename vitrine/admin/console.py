"""
Admin Console State

The console is modelled as an explicit `ConsoleState` value. Every action
below takes a state (plus its input), performs the remote calls it declares,
and returns the next state. The web layer only persists the small,
serializable part of the state between requests; lists are re-fetched and
form values re-hydrated on every render.
"""

import logging
from dataclasses import dataclass, field, replace
from typing import List, Optional

from vitrine.admin.forms import (
    DEFAULT_LEAD_VALUES, DEFAULT_PROPERTY_VALUES,
    validate_lead_form, validate_login_form, validate_property_form,
)
from vitrine.models import (
    Lead, Property, PropertySpecs,
    LEAD_COLUMNS, LEAD_TABLE, PROPERTY_COLUMNS, PROPERTY_TABLE,
)
from vitrine.services.images import build_storage_path, storage_paths_for
from vitrine.services.remote import AuthSession, Query, RemoteServiceError

logger = logging.getLogger(__name__)

MODULES = ('properties', 'leads')

NO_IMAGES_MESSAGE = 'Selecione ao menos uma imagem do imovel.'


@dataclass
class FormState:
    """One create/edit form. Closed when `is_open` is False."""
    is_open: bool = False
    editing_id: Optional[str] = None
    values: dict = field(default_factory=dict)
    existing_images: List[str] = field(default_factory=list)
    errors: dict = field(default_factory=dict)
    submit_error: Optional[str] = None
    submit_success: Optional[str] = None

    @property
    def mode(self):
        if not self.is_open:
            return 'closed'
        return 'edit' if self.editing_id else 'create'

    def to_dict(self):
        return {
            'is_open': self.is_open,
            'editing_id': self.editing_id,
            'submit_error': self.submit_error,
            'submit_success': self.submit_success,
        }

    @classmethod
    def from_dict(cls, data):
        data = data or {}
        return cls(
            is_open=bool(data.get('is_open')),
            editing_id=data.get('editing_id'),
            submit_error=data.get('submit_error'),
            submit_success=data.get('submit_success'),
        )


@dataclass
class ConsoleState:
    session: Optional[AuthSession] = None
    active_module: str = 'properties'
    properties: List[Property] = field(default_factory=list)
    leads: List[Lead] = field(default_factory=list)
    property_list_error: Optional[str] = None
    lead_list_error: Optional[str] = None
    login_email: str = ''
    login_errors: dict = field(default_factory=dict)
    login_error: Optional[str] = None
    property_form: FormState = field(default_factory=FormState)
    lead_form: FormState = field(default_factory=FormState)

    @property
    def is_authenticated(self):
        return self.session is not None

    def select_module(self, module):
        if module not in MODULES:
            return self
        return replace(self, active_module=module)

    def consume_messages(self):
        """Drop one-shot messages once they have been shown."""
        return replace(
            self,
            property_list_error=None,
            lead_list_error=None,
            login_errors={},
            login_error=None,
            property_form=replace(self.property_form, errors={}, submit_error=None, submit_success=None),
            lead_form=replace(self.lead_form, errors={}, submit_error=None, submit_success=None),
        )

    def to_dict(self):
        return {
            'session': self.session.to_dict() if self.session else None,
            'active_module': self.active_module,
            'property_form': self.property_form.to_dict(),
            'lead_form': self.lead_form.to_dict(),
        }

    @classmethod
    def from_dict(cls, data):
        data = data or {}
        module = data.get('active_module')
        return cls(
            session=AuthSession.from_dict(data.get('session')),
            active_module=module if module in MODULES else 'properties',
            property_form=FormState.from_dict(data.get('property_form')),
            lead_form=FormState.from_dict(data.get('lead_form')),
        )


def signed_out(state):
    """Fresh state: no session, no lists, both forms closed."""
    return ConsoleState(active_module=state.active_module)


class SessionGate:
    """Decides whether the viewer holds a live session."""

    def __init__(self, auth):
        self.auth = auth

    def restore(self, state):
        if state.session is None:
            return state
        session = self.auth.get_session(state.session)
        if session is None:
            return signed_out(state)
        return replace(state, session=session)

    def sign_in(self, state, form):
        values, errors = validate_login_form(form)
        state = replace(state, login_email=values['email'], login_errors=errors, login_error=None)
        if errors:
            return state

        try:
            session = self.auth.sign_in_with_password(values['email'], values['password'])
        except RemoteServiceError as e:
            return replace(state, login_error=e.message)

        return replace(state, session=session, login_email='')

    def sign_out(self, state):
        if state.session is not None:
            self.auth.sign_out(state.session)
        return signed_out(state)


class RecordFormController:
    """Create/edit/delete plumbing shared by listings and leads."""

    table = None
    columns = None
    model = None
    defaults = None
    form_attr = None
    list_attr = None
    list_error_attr = None
    created_message = None
    updated_message = None
    deleted_message = None

    def __init__(self, backend):
        self.backend = backend

    def _token(self, state):
        return state.session.access_token if state.session else None

    def _records(self, state):
        return self.backend.records(self._token(state))

    def form(self, state):
        return getattr(state, self.form_attr)

    def _with_form(self, state, form):
        return replace(state, **{self.form_attr: form})

    def _fail(self, state, message):
        return self._with_form(state, replace(self.form(state), submit_error=message))

    def values_from(self, record):
        raise NotImplementedError

    def load(self, state):
        """Replace the in-memory list with the latest fetch, newest first."""
        if state.session is None:
            return state

        query = Query(self.table).select(self.columns).order('created_at', descending=True)
        try:
            rows = self._records(state).fetch(query)
        except RemoteServiceError as e:
            return replace(state, **{self.list_error_attr: e.message})

        return replace(state, **{
            self.list_attr: [self.model.from_row(row) for row in rows],
            self.list_error_attr: None,
        })

    def get(self, state, record_id):
        query = Query(self.table).select(self.columns).eq('id', record_id)
        row = self._records(state).fetch_one(query)
        return self.model.from_row(row) if row else None

    def open_new(self, state):
        return self._with_form(state, FormState(is_open=True, values=dict(self.defaults)))

    def open_edit(self, state, record):
        return self._with_form(state, FormState(
            is_open=True,
            editing_id=record.id,
            values=self.values_from(record),
            existing_images=list(getattr(record, 'images', None) or []),
        ))

    def reset(self, state):
        """Close the form, discarding values, staged files and errors."""
        return self._with_form(state, FormState(submit_success=self.form(state).submit_success))

    def hydrate(self, state):
        """Fill an open form's values after a reload (values are not persisted)."""
        form = self.form(state)
        if not form.is_open or form.values:
            return state
        if form.editing_id is None:
            return self._with_form(state, replace(form, values=dict(self.defaults)))
        if getattr(state, self.list_error_attr):
            return state

        for record in getattr(state, self.list_attr):
            if record.id == form.editing_id:
                return self._with_form(state, replace(
                    form,
                    values=self.values_from(record),
                    existing_images=list(getattr(record, 'images', None) or []),
                ))
        return self.reset(state)

    def _write(self, state, payload):
        records = self._records(state)
        editing_id = self.form(state).editing_id
        if editing_id:
            records.update(self.table, editing_id, payload)
        else:
            records.insert(self.table, payload)

    def _finish_submit(self, state, is_editing):
        state = self.reset(self.load(state))
        message = self.updated_message if is_editing else self.created_message
        return self._with_form(state, replace(self.form(state), submit_success=message))

    def _before_delete(self, state, record):
        pass

    def delete(self, state, record, confirmed=False):
        """Delete `record` once the user confirmed it by name."""
        if not confirmed:
            return state

        state = self._with_form(state, replace(self.form(state), submit_error=None, submit_success=None))
        self._before_delete(state, record)

        try:
            self._records(state).delete(self.table, record.id)
        except RemoteServiceError as e:
            return self._fail(state, e.message)

        if self.form(state).editing_id == record.id:
            state = self.reset(state)
        state = self.load(state)
        return self._with_form(state, replace(self.form(state), submit_success=self.deleted_message))


class ListingFormController(RecordFormController):
    table = PROPERTY_TABLE
    columns = PROPERTY_COLUMNS
    model = Property
    defaults = DEFAULT_PROPERTY_VALUES
    form_attr = 'property_form'
    list_attr = 'properties'
    list_error_attr = 'property_list_error'
    created_message = 'Imovel cadastrado com sucesso.'
    updated_message = 'Imovel atualizado com sucesso.'
    deleted_message = 'Imovel excluido com sucesso.'

    def values_from(self, record):
        specs = record.specs_or_default
        return {
            'title': record.title,
            'property_type': record.property_type or '',
            'description': record.description,
            'price': record.price,
            'city': record.city,
            'neighborhood': record.neighborhood,
            'beds': specs.beds,
            'baths': specs.baths,
            'size': specs.size,
            'parking': specs.parking,
            'status': record.status,
        }

    def submit(self, state, form, files=(), retained_images=None):
        """Validate, upload staged files in order, then insert or replace the record.

        `retained_images` are the existing URLs the user kept; None keeps all.
        """
        current = replace(self.form(state), is_open=True, submit_error=None, submit_success=None)
        state = self._with_form(state, current)

        values, errors = validate_property_form(form)
        raw = {name: form.get(name, default) for name, default in DEFAULT_PROPERTY_VALUES.items()}
        if errors:
            return self._with_form(state, replace(current, values=raw, errors=errors))

        existing = list(current.existing_images if retained_images is None else retained_images)
        state = self._with_form(state, replace(current, values=raw, errors={}))

        staged = [f for f in files if f.filename]
        if not staged and not existing:
            return self._fail(state, NO_IMAGES_MESSAGE)

        storage = self.backend.storage(self._token(state))
        uploaded = []
        for staged_file in staged:
            path = build_storage_path(staged_file.filename)
            try:
                storage.upload(path, staged_file.data, content_type=staged_file.content_type,
                               cache_control='3600', upsert=False)
            except RemoteServiceError as e:
                return self._fail(state, f'Falha ao enviar imagem: {e.message}')
            uploaded.append(storage.get_public_url(path))

        record = Property(
            id=current.editing_id,
            title=values['title'],
            property_type=values['property_type'],
            description=values['description'],
            price=values['price'],
            city=values['city'],
            neighborhood=values['neighborhood'],
            status=values['status'],
            images=existing + uploaded,
            specs=PropertySpecs(beds=values['beds'], baths=values['baths'],
                                size=values['size'], parking=values['parking']),
        )

        try:
            self._write(state, record.to_payload())
        except RemoteServiceError as e:
            if uploaded:
                logger.warning('Save failed after uploading %d image(s); objects left in storage: %s',
                               len(uploaded), uploaded)
            return self._fail(state, e.message)

        return self._finish_submit(state, bool(current.editing_id))

    def _before_delete(self, state, record):
        paths = storage_paths_for(record.images, self.backend.bucket)
        if not paths:
            return
        try:
            self.backend.storage(self._token(state)).remove(paths)
        except RemoteServiceError as e:
            # Image cleanup never blocks the record deletion.
            logger.warning('Could not remove images of property %s: %s', record.id, e.message)


class LeadFormController(RecordFormController):
    table = LEAD_TABLE
    columns = LEAD_COLUMNS
    model = Lead
    defaults = DEFAULT_LEAD_VALUES
    form_attr = 'lead_form'
    list_attr = 'leads'
    list_error_attr = 'lead_list_error'
    created_message = 'Lead cadastrado com sucesso.'
    updated_message = 'Lead atualizado com sucesso.'
    deleted_message = 'Lead excluido com sucesso.'

    def values_from(self, record):
        return {
            'name': record.name,
            'phone': record.phone,
            'email': record.email or '',
            'source': record.source,
            'interested_property': record.interested_property or '',
            'notes': record.notes or '',
            'status': record.status,
        }

    def submit(self, state, form):
        current = replace(self.form(state), is_open=True, submit_error=None, submit_success=None)
        state = self._with_form(state, current)

        values, errors = validate_lead_form(form)
        raw = {name: form.get(name, default) for name, default in DEFAULT_LEAD_VALUES.items()}
        state = self._with_form(state, replace(current, values=raw, errors=errors))
        if errors:
            return state

        record = Lead(id=current.editing_id, **values)
        try:
            self._write(state, record.to_payload())
        except RemoteServiceError as e:
            return self._fail(state, e.message)

        return self._finish_submit(state, bool(current.editing_id))


class Console:
    """The gate and both controllers bound to one backend."""

    def __init__(self, backend):
        self.gate = SessionGate(backend.auth)
        self.listings = ListingFormController(backend)
        self.leads = LeadFormController(backend)

    def reload(self, state):
        return self.leads.load(self.listings.load(state))

    def hydrate(self, state):
        return self.leads.hydrate(self.listings.hydrate(state))

    def sign_in(self, state, form):
        state = self.gate.sign_in(state, form)
        if state.session is None:
            return state
        return self.reload(state)

    def sign_out(self, state):
        return self.gate.sign_out(state)

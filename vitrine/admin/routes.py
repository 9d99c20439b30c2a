"""
Admin Routes

Every handler loads the console state, applies one console action and
either re-renders (when the action left something to show on the form) or
saves the state and redirects back to the console.
"""

from dataclasses import replace

from flask import flash, g, redirect, render_template, request, url_for
from flask_login import login_user, logout_user

from vitrine.admin import admin_bp
from vitrine.admin.decorators import admin_required, load_state, save_state, service_required
from vitrine.admin.forms import PROPERTY_TYPES
from vitrine.models import AdminUser, LEAD_STATUSES, PROPERTY_STATUSES
from vitrine.services.remote import RemoteServiceError, StagedFile
from vitrine.site import ADMIN_SUPPORT_WHATSAPP_URL, BROKER_NAME, LEAD_STATUS_LABELS


def _render_console(state):
    console = g.console
    state = console.hydrate(console.reload(state))
    save_state(state.consume_messages())
    return render_template('admin/console.html',
                           state=state,
                           broker_name=BROKER_NAME,
                           support_url=ADMIN_SUPPORT_WHATSAPP_URL,
                           property_types=PROPERTY_TYPES,
                           property_statuses=PROPERTY_STATUSES,
                           lead_statuses=LEAD_STATUSES,
                           lead_status_labels=LEAD_STATUS_LABELS)


def _back_to(module):
    return redirect(url_for('admin.console', module=module))


def _fetch_record(controller, record_id):
    """Look a record up for edit/delete; flash and return None when that fails."""
    try:
        record = controller.get(g.state, record_id)
    except RemoteServiceError as e:
        flash(e.message, 'danger')
        return None
    if record is None:
        flash('Registro nao encontrado.', 'warning')
    return record


@admin_bp.route('/')
@service_required
def console():
    """Console, or the login form when there is no live session."""
    state = g.console.gate.restore(load_state()).select_module(request.args.get('module'))

    if not state.is_authenticated:
        logout_user()
        save_state(state)
        return render_template('admin/login.html', state=state, broker_name=BROKER_NAME)

    return _render_console(state)


@admin_bp.route('/login', methods=['POST'])
@service_required
def login():
    state = g.console.sign_in(load_state(), request.form)

    if not state.is_authenticated:
        save_state(state.consume_messages())
        return render_template('admin/login.html', state=state, broker_name=BROKER_NAME)

    login_user(AdminUser.from_session(state.session))
    save_state(state)
    return redirect(url_for('admin.console'))


@admin_bp.route('/logout', methods=['POST'])
@admin_required
def logout():
    """Sign out remotely and drop lists and open forms."""
    state = g.console.sign_out(g.state)
    logout_user()
    save_state(state)
    flash('Voce saiu do painel administrativo.', 'info')
    return redirect(url_for('admin.console'))


# -----------------------------------------------------------------------------
# Properties
# -----------------------------------------------------------------------------

@admin_bp.route('/properties/new')
@admin_required
def new_property():
    state = g.console.listings.open_new(g.state.select_module('properties'))
    save_state(state)
    return _back_to('properties')


@admin_bp.route('/properties/<record_id>/edit')
@admin_required
def edit_property(record_id):
    record = _fetch_record(g.console.listings, record_id)
    state = g.state.select_module('properties')
    if record is not None:
        state = g.console.listings.open_edit(state, record)
    save_state(state)
    return _back_to('properties')


@admin_bp.route('/properties/cancel', methods=['POST'])
@admin_required
def cancel_property():
    save_state(g.console.listings.reset(g.state))
    return _back_to('properties')


@admin_bp.route('/properties/save', methods=['POST'])
@admin_required
def save_property():
    """Create or update the property open in the form, uploading new images."""
    listings = g.console.listings
    state = g.state.select_module('properties')

    retained = []
    editing_id = state.property_form.editing_id
    if editing_id:
        record = _fetch_record(listings, editing_id)
        if record is None:
            save_state(listings.reset(state))
            return _back_to('properties')
        kept = set(request.form.getlist('existing_images'))
        retained = [url for url in record.images if url in kept]
        state = replace(state, property_form=replace(state.property_form, existing_images=retained))

    files = [StagedFile(f.filename, f.read(), f.mimetype)
             for f in request.files.getlist('images') if f and f.filename]

    state = listings.submit(state, request.form, files, retained)
    if state.property_form.is_open:
        return _render_console(state)

    save_state(state)
    return _back_to('properties')


@admin_bp.route('/properties/<record_id>/delete', methods=['GET', 'POST'])
@admin_required
def delete_property(record_id):
    record = _fetch_record(g.console.listings, record_id)
    if record is None:
        return _back_to('properties')

    if request.method == 'GET':
        return render_template('admin/confirm_delete.html',
                               question=f'Deseja excluir o imovel "{record.title}"?',
                               action=url_for('admin.delete_property', record_id=record.id),
                               module='properties')

    state = g.console.listings.delete(g.state.select_module('properties'), record,
                                      confirmed=request.form.get('confirm') == 'yes')
    if state.property_form.submit_error:
        return _render_console(state)

    save_state(state)
    return _back_to('properties')


# -----------------------------------------------------------------------------
# Leads
# -----------------------------------------------------------------------------

@admin_bp.route('/leads/new')
@admin_required
def new_lead():
    state = g.console.leads.open_new(g.state.select_module('leads'))
    save_state(state)
    return _back_to('leads')


@admin_bp.route('/leads/<record_id>/edit')
@admin_required
def edit_lead(record_id):
    record = _fetch_record(g.console.leads, record_id)
    state = g.state.select_module('leads')
    if record is not None:
        state = g.console.leads.open_edit(state, record)
    save_state(state)
    return _back_to('leads')


@admin_bp.route('/leads/cancel', methods=['POST'])
@admin_required
def cancel_lead():
    save_state(g.console.leads.reset(g.state))
    return _back_to('leads')


@admin_bp.route('/leads/save', methods=['POST'])
@admin_required
def save_lead():
    state = g.console.leads.submit(g.state.select_module('leads'), request.form)
    if state.lead_form.is_open:
        return _render_console(state)

    save_state(state)
    return _back_to('leads')


@admin_bp.route('/leads/<record_id>/delete', methods=['GET', 'POST'])
@admin_required
def delete_lead(record_id):
    record = _fetch_record(g.console.leads, record_id)
    if record is None:
        return _back_to('leads')

    if request.method == 'GET':
        return render_template('admin/confirm_delete.html',
                               question=f'Deseja excluir o lead "{record.name}"?',
                               action=url_for('admin.delete_lead', record_id=record.id),
                               module='leads')

    state = g.console.leads.delete(g.state.select_module('leads'), record,
                                   confirmed=request.form.get('confirm') == 'yes')
    if state.lead_form.submit_error:
        return _render_console(state)

    save_state(state)
    return _back_to('leads')

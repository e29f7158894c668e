"""
Main NiceGUI application for Petalburg.
Opens one Junebug scene (*.sc.json), wires the host side (SceneDocument +
SceneEditorProvider) to the view side (SceneView + SceneCanvas) through an
in-process channel pair, and renders the canvas with ui.interactive_image.

Usage: python app.py [path/to/scene.sc.json]
"""

import logging
import sys

from dotenv import load_dotenv
load_dotenv()

from nicegui import ui

from petalburg.assets import GameAssets
from petalburg.config import get_editor_settings, set_scene_path
from petalburg.document import (
    DocumentSaveError,
    EditBridge,
    NoActiveViewError,
    SceneDocument,
    create_channel_pair,
)
from petalburg.edit.canvas import SceneCanvas
from petalburg.edit.camera import Camera
from petalburg.edit.handlers import create_canvas_element, setup_canvas_handlers
from petalburg.host import SceneEditorProvider
from petalburg.paths import find_backup, get_backup_path
from petalburg.project_manager import create_project
from petalburg.ui_common import (
    render_actor_panel,
    render_invalid_notice,
    render_scene_panel,
    scene_title,
)
from petalburg.view import SceneView

settings = get_editor_settings()
logging.basicConfig(
    level=getattr(logging, str(settings.log_level).upper(), logging.INFO),
    format='%(asctime)s %(levelname)s %(name)s: %(message)s',
)
logger = logging.getLogger(__name__)

if len(sys.argv) > 1 and not sys.argv[1].startswith('-'):
    settings.scene_path = sys.argv[1]


# Helper to show create project dialog
def show_create_project_dialog(default_parent: str = ''):
    """Show modal dialog to scaffold a new Junebug game project."""
    with ui.dialog() as dialog, ui.card().classes('w-96'):
        ui.label('Create New Junebug Project').classes('text-lg font-bold')

        name_input = ui.input('Project Name', placeholder='e.g., junebug-game').classes('w-full')
        parent_input = ui.input('Parent Folder', value=default_parent).classes('w-full')
        clone_switch = ui.switch('Clone engine into lib/', value=False)

        error_label = ui.label('').classes('text-red-500 text-sm')

        def do_create():
            result = create_project(
                name_input.value,
                parent_input.value or '.',
                clone_engine=clone_switch.value,
            )
            if result['success']:
                ui.notify(result['message'], type='positive')
                dialog.close()
            else:
                error_label.text = result['message']

        with ui.row().classes('w-full justify-end gap-2 mt-4'):
            ui.button('Cancel', on_click=dialog.close).props('flat')
            ui.button('Create Project', on_click=do_create).props('color=primary')

    dialog.open()
    return dialog


# UI Construction - one document, provider and view per page client
@ui.page('/')
def main_page():
    ui.dark_mode().enable()
    ui.query('body').style('margin: 0; padding: 0; overflow: hidden;')

    host_channel, view_channel = create_channel_pair()
    bridge = EditBridge()
    backup = find_backup(settings.scene_path)
    try:
        document = SceneDocument.open(settings.scene_path or None, bridge, backup_path=backup)
        if backup is not None:
            logger.info(f"Restored {settings.scene_path or 'untitled scene'} from backup {backup}")
            ui.notify(f'Restored unsaved changes from {backup.name}; Revert discards them',
                      type='info', position='bottom-right')
    except DocumentSaveError as e:
        logger.error(f"Could not open scene {settings.scene_path}: {e}")
        ui.notify(f'Could not open scene: {e}', type='negative')
        backup = None
        document = SceneDocument.open(None, bridge)

    provider = SceneEditorProvider(document, host_channel)
    view = SceneView(view_channel)
    canvas = SceneCanvas(
        view,
        width=settings.canvas_width,
        height=settings.canvas_height,
        scale_rate=settings.scale_rate,
        tile_size=settings.tile_size,
        camera=Camera(offset=(settings.tile_size, settings.tile_size)),
    )
    state = {
        'selected_id': None,
        'backup_disposer': (lambda: backup.unlink(missing_ok=True)) if backup else None,
    }

    # --- Document actions ---

    def dispose_backup():
        disposer = state['backup_disposer']
        if disposer is not None:
            disposer()
            state['backup_disposer'] = None

    async def do_save():
        if document.untitled:
            ui.notify('Untitled scene: use Backup or open a file to save', type='warning')
            return
        try:
            await document.save()
        except (DocumentSaveError, NoActiveViewError) as e:
            logger.error(f"Save failed: {e}")
            ui.notify(f'Save failed: {e}', type='negative')
            return
        dispose_backup()
        set_scene_path(str(document.path))
        ui.notify(f'Saved {document.file_name}', type='positive', position='bottom-right')

    async def do_backup():
        destination = get_backup_path(document.file_name)
        try:
            disposer = await document.backup(destination)
        except (DocumentSaveError, NoActiveViewError) as e:
            logger.error(f"Backup failed: {e}")
            ui.notify(f'Backup failed: {e}', type='negative')
            return
        state['backup_disposer'] = disposer
        ui.notify(f'Backup written to {destination}', position='bottom-right')

    def do_undo():
        if document.undo() is None:
            ui.notify('Nothing to undo', position='bottom-right', color='grey')

    def do_redo():
        if document.redo() is None:
            ui.notify('Nothing to redo', position='bottom-right', color='grey')

    def do_revert():
        try:
            document.revert()
        except DocumentSaveError as e:
            ui.notify(f'Revert failed: {e}', type='negative')
            return
        dispose_backup()
        ui.notify('Reverted to saved file', position='bottom-right')

    async def on_shortcut(action: str):
        if action == 'save':
            await do_save()
        elif action == 'undo':
            do_undo()
        elif action == 'redo':
            do_redo()

    # --- Layout ---

    with ui.header().classes('items-center gap-2 bg-slate-800'):
        title_label = ui.label(scene_title(document.file_name)).classes('text-lg font-bold')
        dirty_badge = ui.badge('unsaved', color='orange').props('outline')
        ui.space()
        ui.button(icon='save', on_click=do_save).props('flat dense').tooltip('Save (Ctrl+S)')
        ui.button(icon='backup', on_click=do_backup).props('flat dense').tooltip('Write backup copy')
        ui.button(icon='undo', on_click=do_undo).props('flat dense').tooltip('Undo (Ctrl+Z)')
        ui.button(icon='redo', on_click=do_redo).props('flat dense').tooltip('Redo (Ctrl+Shift+Z)')
        ui.button(icon='restore', on_click=do_revert).props('flat dense').tooltip('Revert to saved')
        ui.separator().props('vertical')
        ui.button(icon='create_new_folder', on_click=lambda: show_create_project_dialog(settings.workspace or '')) \
            .props('flat dense').tooltip('New Junebug project')

    def refresh_status(_=None):
        dirty_badge.set_visibility(document.is_dirty)
        title_label.text = scene_title(document.file_name)

    for event in ('change', 'content_change', 'save'):
        document.on(event, refresh_status)
    refresh_status()

    with ui.row().classes('w-full no-wrap gap-4 p-4'):
        with ui.column().classes('grow items-center'):
            @ui.refreshable
            def canvas_area():
                if not view.valid_file:
                    render_invalid_notice()
                    return
                image = create_canvas_element(canvas, handlers)

                def push_svg(svg: str):
                    image.content = svg
                render_target['push'] = push_svg
                push_svg(canvas.render())

            render_target = {'push': lambda svg: None}
            handlers = setup_canvas_handlers(
                canvas,
                lambda svg: render_target['push'](svg),
                on_shortcut=on_shortcut,
            )
            canvas_area()

        with ui.column().classes('w-72 shrink-0 gap-2'):
            @ui.refreshable
            def side_panel():
                render_scene_panel(view, view.make_edit)
                render_actor_panel(view, state['selected_id'])
            side_panel()

            if settings.workspace:
                ui.separator()
                ui.label('Game Assets').classes('text-sm text-gray-400')
                assets = GameAssets(settings.workspace)

                def open_scene(e):
                    if not e.value or e.value == settings.scene_path:
                        return
                    settings.scene_path = e.value
                    set_scene_path(e.value)
                    ui.navigate.reload()

                @ui.refreshable
                def scene_picker():
                    options = {str(p): scene_title(p.name) for p in assets.scene_files()}
                    if options:
                        ui.select(options, value=settings.scene_path if settings.scene_path in options else None,
                                  label='Open scene', on_change=open_scene).props('dense outlined').classes('w-full')
                scene_picker()

                @ui.refreshable
                def assets_tree():
                    nodes = assets.tree()
                    if not nodes:
                        ui.label('No assets folder').classes('text-xs text-gray-500')
                        return
                    ui.tree(nodes, label_key='label').props('dense')
                assets_tree()
                assets.poll()

                def check_assets():
                    if assets.poll():
                        assets_tree.refresh()
                        scene_picker.refresh()
                ui.timer(2.0, check_assets)

    # --- View wiring ---

    was_valid = {'value': view.valid_file}

    def on_view_change(_view):
        if view.valid_file != was_valid['value']:
            was_valid['value'] = view.valid_file
            canvas_area.refresh()
        side_panel.refresh()

    view.on_change(on_view_change)
    view.start()

    def frame():
        handlers['handle_tick']()
        selected = canvas.last_frame.selected_id
        if selected != state['selected_id']:
            state['selected_id'] = selected
            side_panel.refresh()

    ui.keyboard(on_key=handlers['handle_keyboard'])
    ui.timer(1.0 / max(settings.frame_rate, 1.0), frame)

    def on_disconnect():
        view.dispose()
        provider.dispose()
        document.dispose()

    ui.context.client.on_disconnect(on_disconnect)


if __name__ in {"__main__", "__mp_main__"}:
    ui.run(
        title='Petalburg',
        port=settings.port,
        reload=not getattr(sys, 'frozen', False),
    )

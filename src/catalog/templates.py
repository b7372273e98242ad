# Jinja templates rendered with render_template_string.

LAYOUT = """<!doctype html>
<html lang="id" class="{{ theme }}">
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<title>Release Catalog{% if source %} · {{ source.display_name }}{% endif %}</title>
<style>
  :root { --bg: #fafafa; --fg: #1c1c1c; --card: #fff; --muted: #6b6b6b; --accent: #3b5bdb; --danger: #c92a2a; }
  .dark { --bg: #161616; --fg: #eee; --card: #232323; --muted: #9a9a9a; --accent: #748ffc; --danger: #ff6b6b; }
  body { margin: 0; font-family: system-ui, sans-serif; background: var(--bg); color: var(--fg); }
  header, main { max-width: 960px; margin: 0 auto; padding: 1rem; }
  header { display: flex; flex-wrap: wrap; gap: .5rem; align-items: center; }
  header h1 { font-size: 1.2rem; margin: 0 auto 0 0; }
  .card { background: var(--card); border-radius: 8px; padding: 1rem; margin-bottom: .75rem; display: flex; gap: 1rem; }
  .card img { width: 72px; height: 72px; object-fit: cover; border-radius: 4px; }
  .muted { color: var(--muted); font-size: .85rem; }
  .flash { padding: .5rem 1rem; border-radius: 6px; margin-bottom: .5rem; background: var(--card); }
  .flash.error { border-left: 4px solid var(--danger); }
  .flash.success { border-left: 4px solid var(--accent); }
  .badge { font-size: .75rem; padding: .1rem .5rem; border-radius: 999px; border: 1px solid var(--muted); }
  .remediation { background: var(--card); border-top: 4px solid var(--danger); padding: 1rem; border-radius: 8px; }
  code, .email { background: var(--bg); padding: .1rem .3rem; border-radius: 4px; word-break: break-all; }
  form.inline { display: inline; }
  label { display: block; margin-top: .5rem; }
  input, select { width: 100%; box-sizing: border-box; padding: .4rem; }
  #offline-banner { background: var(--danger); color: #fff; text-align: center; padding: .4rem; }
  #overlay { position: fixed; inset: 0; background: rgba(0,0,0,.4); display: flex; align-items: center; justify-content: center; color: #fff; }
  #overlay[hidden] { display: none; }
</style>
</head>
<body>
<div id="offline-banner" hidden>No internet connection. Loading and saving are paused.</div>
<header>
  <h1>Release Catalog</h1>
  <form class="inline" method="post" action="{{ url_for('refresh') }}" id="refresh-form">
    <button type="submit" data-requires-network>Refresh</button>
  </form>
  <form class="inline" method="post" action="{{ url_for('toggle_theme') }}">
    <button type="submit">{{ 'Light' if theme == 'dark' else 'Dark' }} mode</button>
  </form>
  <details>
    <summary>Data source: {{ source.display_name if source else 'none' }}</summary>
    <ul>
    {% for item in sources %}
      <li>
        <form class="inline" method="post" action="{{ url_for('activate_source', config_id=item.config_id) }}">
          <button type="submit" data-requires-network>{{ '✓ ' if source and item.config_id == source.config_id else '' }}{{ item.display_name }}</button>
        </form>
        {% if item.is_deletable %}
        <form class="inline" method="post" action="{{ url_for('delete_source', config_id=item.config_id) }}">
          <button type="submit">Remove</button>
        </form>
        {% endif %}
      </li>
    {% endfor %}
    </ul>
    <form method="post" action="{{ url_for('add_source') }}">
      <label>Display name <input name="display_name" value="{{ suggested_name }}" required></label>
      <label>Spreadsheet ID <input name="spreadsheet_id" required></label>
      <label>Sheet name <input name="sheet_name" value="Sheet1" required></label>
      <button type="submit">Add data source</button>
    </form>
  </details>
</header>
<main>
  {% with messages = get_flashed_messages(with_categories=true) %}
    {% for category, message in messages %}
      <div class="flash {{ category }}">{{ message }}</div>
    {% endfor %}
  {% endwith %}
  {{ content|safe }}
</main>
<div id="overlay" hidden>Saving…</div>
<script>
  function syncOnline() {
    var offline = !navigator.onLine;
    document.getElementById('offline-banner').hidden = !offline;
    document.querySelectorAll('[data-requires-network]').forEach(function (el) { el.disabled = offline; });
  }
  window.addEventListener('offline', syncOnline);
  window.addEventListener('online', function () {
    syncOnline();
    document.getElementById('refresh-form').submit();
  });
  document.addEventListener('DOMContentLoaded', syncOnline);
  document.addEventListener('submit', function (event) {
    if (!navigator.onLine) {
      event.preventDefault();
      alert('No internet connection. Check your connection and try again.');
      return;
    }
    document.getElementById('overlay').hidden = false;
  });
</script>
</body>
</html>
"""

CATALOG = """
<form method="get" action="{{ url_for('index') }}">
  <input type="search" name="q" value="{{ query }}" placeholder="Search title or artist">
</form>
<p>
  <a href="{{ url_for('new_release') }}">+ Add release</a>
  {% if state.last_updated %}<span class="muted">Last updated {{ last_updated }}</span>{% endif %}
</p>
{% if state.error %}
  <div class="flash error">Error loading the latest data: {{ state.error }}</div>
{% endif %}
{% for release in releases %}
  <div class="card">
    {% if release.artwork_url %}<img src="{{ release.artwork_url }}" alt="">{% endif %}
    <div>
      <strong>{{ release.title }}</strong><br>
      {{ release.artist }}<br>
      <span class="muted">{{ release.release_id }}</span>
      <span class="badge">{{ release.status }}</span>
      {% if release.card_key %}
        <br><a href="{{ url_for('release_detail', card_key=release.card_key) }}">Details</a>
      {% else %}
        <br><span class="muted">No release ID; read only.</span>
      {% endif %}
    </div>
  </div>
{% endfor %}
{% if not releases and query %}
  <p class="muted">No releases match "{{ query }}".</p>
{% elif not releases and not state.error %}
  <p class="muted">No releases yet.</p>
{% endif %}
"""

DETAIL = """
<div class="card">
  {% if release.artwork_url %}<img src="{{ release.artwork_url }}" alt="">{% endif %}
  <div>
    <h2>{{ release.title }}</h2>
    <p>{{ release.artist }}</p>
    <dl>
      <dt>ID Rilis</dt><dd>{{ release.release_id }}</dd>
      <dt>UPC</dt><dd>{{ release.upc_code }}</dd>
      <dt>ISRC</dt><dd>{{ release.isrc_code }}</dd>
      <dt>Status</dt><dd>{{ release.status }}</dd>
      <dt>Tanggal Tayang</dt><dd>{{ release.release_date }}</dd>
      <dt>Audio</dt><dd>{% if release.audio_url %}<a href="{{ release.audio_url }}">{{ release.audio_url }}</a>{% else %}N/A{% endif %}</dd>
    </dl>
    <a href="{{ url_for('edit_release', card_key=release.card_key) }}">Edit</a>
    <form class="inline" method="post" action="{{ url_for('delete_release', card_key=release.card_key) }}"
          onsubmit="return confirm('Delete this release?');">
      <button type="submit" data-requires-network>Delete</button>
    </form>
    <a href="{{ url_for('index') }}">Back</a>
  </div>
</div>
"""

RELEASE_FORM = """
<h2>{{ 'Edit release' if card_key else 'Add release' }}</h2>
<form method="post" enctype="multipart/form-data"
      action="{{ url_for('update_release', card_key=card_key) if card_key else url_for('create_release') }}">
  <label>ID Rilis <input name="release_id" value="{{ form.release_id }}" readonly></label>
  <label>Release title <input name="title" value="{{ form.title }}" required></label>
  <label>Artist <input name="artist" value="{{ form.artist }}" required></label>
  <label>Artwork
    <input type="file" name="artwork_file" accept="image/*">
  </label>
  {% if form.existing_artwork_url %}<span class="muted">Current: {{ form.existing_artwork_url }}</span>{% endif %}
  <input type="hidden" name="existing_artwork_url" value="{{ form.existing_artwork_url }}">
  <label>Audio
    <input type="file" name="audio_file" accept="audio/*">
  </label>
  {% if form.existing_audio_url %}<span class="muted">Current: {{ form.existing_audio_url }}</span>{% endif %}
  <input type="hidden" name="existing_audio_url" value="{{ form.existing_audio_url }}">
  <label>UPC Code <input name="upc_code" value="{{ form.upc_code }}"></label>
  <label>ISRC Code <input name="isrc_code" value="{{ form.isrc_code }}"></label>
  <label>Status
    <select name="status">
      {% for option in status_options %}
        <option value="{{ option }}" {% if option == form.status %}selected{% endif %}>{{ option }}</option>
      {% endfor %}
    </select>
  </label>
  <label>Tanggal Tayang <input type="date" name="release_date" value="{{ form.release_date }}"></label>
  <p>
    <button type="submit" data-requires-network>{{ 'Save changes' if card_key else 'Add & save' }}</button>
    <a href="{{ url_for('index') }}">Cancel</a>
  </p>
</form>
"""

PERMISSION_REQUIRED = """
<div class="remediation">
  <h2>Configuration error</h2>
  <p>Loading failed because the service account cannot access this Google Sheet.</p>
  <p>Make sure spreadsheet <code>{{ state.spreadsheet_id or 'default' }}</code>
     (sheet: <code>{{ state.sheet_name }}</code>) is shared with this service account email:</p>
  <p class="email">{{ service_account_email or 'Service account email could not be loaded.' }}</p>
  <form method="post" action="{{ url_for('refresh') }}">
    <button type="submit" data-requires-network>Try again</button>
  </form>
</div>
"""

CONFIGURATION_REQUIRED = """
<div class="remediation">
  <h2>Configuration required</h2>
  <p>{{ state.error }}</p>
  <p>Select or add a data source with a valid spreadsheet ID and sheet name.</p>
  <form method="post" action="{{ url_for('refresh') }}">
    <button type="submit" data-requires-network>Try again</button>
  </form>
</div>
"""

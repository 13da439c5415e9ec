"""HTML served at `/`: the Notes shell plus the self-heal testing buttons."""
from __future__ import annotations

from html import escape
from string import Template

NOT_READY_HTML = "<h1>Not Ready</h1>"

INDEX_TEMPLATE = Template("""<!DOCTYPE html>
<html lang="en">
  <head>
    <meta charset="UTF-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1.0" />
    <title>$title</title>
    <script src="https://unpkg.com/lucide@latest"></script>
    <script src="https://cdn.tailwindcss.com"></script>
  </head>
  <body class="bg-white min-h-screen flex flex-col text-black">
    <header class="bg-white border-b border-gray-200">
      <div class="max-w-6xl mx-auto px-6 py-4 flex items-center justify-between">
        <div class="flex items-center gap-3">
          <i data-lucide="notebook-pen" class="w-6 h-6 text-black"></i>
          <span class="text-lg font-semibold tracking-tight">$title</span>
        </div>
        <div class="relative w-72 max-w-xs hidden sm:block">
          <i data-lucide="search" class="absolute left-4 top-1/2 -translate-y-1/2 w-4 h-4 text-gray-400"></i>
          <input
            type="text"
            id="searchInput"
            placeholder="Search notes..."
            class="bg-gray-100 border border-gray-300 text-black rounded-full pl-10 pr-4 py-2 w-full text-sm focus:outline-none focus:ring-2 focus:ring-blue-600"
            oninput="handleSearch(this.value)"
          />
        </div>
      </div>
    </header>

    <section class="max-w-6xl mx-auto px-6 py-8">
      <h2 class="text-2xl font-bold mb-6 text-center text-gray-800">K8s Self-Heal Testing</h2>
      <div class="grid grid-cols-2 sm:grid-cols-4 gap-4 text-center">
        <button onclick="callEndpoint('/healthz')" class="bg-green-600 hover:bg-green-700 px-4 py-2 rounded-md font-medium text-white">Check Health</button>
        <button onclick="callEndpoint('/unhealthy')" class="bg-red-600 hover:bg-red-700 px-4 py-2 rounded-md font-medium text-white">Mark Unhealthy</button>
        <button onclick="callEndpoint('/ready')" class="bg-blue-600 hover:bg-blue-700 px-4 py-2 rounded-md font-medium text-white">Mark Ready</button>
        <button onclick="callEndpoint('/notready')" class="bg-yellow-400 hover:bg-yellow-500 text-black px-4 py-2 rounded-md font-medium">Mark Not Ready</button>
      </div>
      <div id="response" class="mt-4 text-center text-gray-600"></div>
    </section>

    <main class="flex-1 flex items-center justify-center">
      <div class="text-center space-y-4">
        <div class="w-16 h-16 rounded-full bg-gray-100 flex items-center justify-center mx-auto">
          <i data-lucide="file-text" class="w-7 h-7 text-gray-400"></i>
        </div>
        <div>
          <p class="text-lg font-semibold text-gray-900">No notes yet</p>
          <p class="text-sm text-gray-500 mt-1">Create your first note to get started.</p>
        </div>
        <button
          onclick="createNote()"
          class="mt-2 inline-flex items-center justify-center px-5 py-2.5 rounded-md bg-black text-white text-sm font-medium hover:bg-gray-800 transition-colors"
        >
          Create Note
        </button>
      </div>
    </main>

    <footer class="border-t border-gray-200">
      <div class="max-w-6xl mx-auto px-6 py-2 text-center text-xs text-gray-500">
        $footer
      </div>
    </footer>

    <button
      onclick="createNote()"
      class="fixed bottom-6 right-6 w-12 h-12 rounded-full bg-black text-white flex items-center justify-center shadow-lg hover:bg-gray-800 transition-colors"
      aria-label="Create Note"
    >
      <i data-lucide="plus" class="w-5 h-5"></i>
    </button>

    <script>
      lucide.createIcons();

      async function callEndpoint(endpoint) {
        const res = await fetch(endpoint);
        const text = await res.text();
        document.getElementById("response").innerText = endpoint + ": " + text;
      }

      function handleSearch(query) {
        console.log("Searching for:", query);
      }

      function createNote() {
        alert("Create Note clicked (stub)");
      }
    </script>
  </body>
</html>
""")


def render_index(title: str, footer: str) -> str:
    return INDEX_TEMPLATE.substitute(title=escape(title), footer=escape(footer))

"""Static HTML served for manual testing of the chat endpoint."""

INDEX_HTML = """<!doctype html>
<html lang="fr">
<head>
  <meta charset="utf-8" />
  <meta name="viewport" content="width=device-width, initial-scale=1" />
  <title>Travel Chatbot API</title>
  <style>
    body{font-family:system-ui,-apple-system,Segoe UI,Roboto,Ubuntu,sans-serif;line-height:1.5;padding:24px}
    code{background:#f6f8fa;padding:2px 4px;border-radius:6px}
  </style>
</head>
<body>
  <h1>Travel Chatbot API</h1>
  <p>Serveur opérationnel ✅</p>
  <p>Essayez la page <a href="/playground">/playground</a> pour tester le chat.</p>
  <ul>
    <li>GET <code>/health</code></li>
    <li>POST <code>/chat</code> (JSON)</li>
  </ul>
</body>
</html>"""

PLAYGROUND_HTML = """<!doctype html>
<html lang="fr">
<head>
  <meta charset="utf-8" />
  <meta name="viewport" content="width=device-width, initial-scale=1" />
  <title>Travel Chatbot Playground</title>
  <style>
    body{font-family:system-ui,Segoe UI,Roboto,Ubuntu,sans-serif;line-height:1.5;margin:0;padding:24px}
    label{display:block;margin:12px 0 4px}
    .suggestions{display:flex;flex-wrap:wrap;gap:8px;margin-top:8px}
    .pill{padding:6px 10px;border:1px solid #ddd;border-radius:999px;cursor:pointer;background:#f7f7f7}
    pre{background:#0b1020;color:#d1e7ff;padding:12px;border-radius:8px;overflow:auto}
  </style>
</head>
<body>
  <h1>Travel Chatbot – Playground</h1>
  <label for="sid">Session ID</label>
  <input id="sid" value="u1" />
  <label for="msg">Message</label>
  <input id="msg" placeholder="Ex: start" style="width:min(600px,90%)" />
  <button id="send">Envoyer</button>
  <div class="suggestions" id="sugs"></div>
  <h3>Réponse</h3>
  <pre id="out">(en attente…)</pre>
  <script>
    const out = document.getElementById('out');
    const sugs = document.getElementById('sugs');
    const sid = document.getElementById('sid');
    const msg = document.getElementById('msg');
    async function send(message){
      const r = await fetch('/chat', {
        method: 'POST',
        headers: {'Content-Type': 'application/json'},
        body: JSON.stringify({session_id: sid.value || 'u1', message}),
      });
      const j = await r.json();
      out.textContent = JSON.stringify(j, null, 2);
      sugs.innerHTML = '';
      (j.suggestions || []).forEach(s => {
        const b = document.createElement('button');
        b.className = 'pill';
        b.textContent = s;
        b.onclick = () => { msg.value = s; send(s); };
        sugs.appendChild(b);
      });
    }
    document.getElementById('send').onclick = () => send(msg.value || 'start');
  </script>
</body>
</html>"""

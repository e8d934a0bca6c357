"""
Bridge Docs HTML Templates
Jinja strings rendered with render_template_string.
"""

BASE_CSS = """
:root{--bg:#f1f5f9;--sf:#ffffff;--sf2:#f8fafc;--bd:#e2e8f0;--tx:#0f172a;--tx2:#64748b;
--ac:#2563eb;--gn:#16a34a;--yl:#ca8a04;--rd:#dc2626;--nv:#2d3748;--r:10px}
*{margin:0;padding:0;box-sizing:border-box}
body{font-family:system-ui,-apple-system,'Segoe UI',sans-serif;background:var(--bg);color:var(--tx);min-height:100vh}
a{color:var(--ac);text-decoration:none}
.hdr{background:var(--nv);color:#fff;padding:14px 28px;display:flex;justify-content:space-between;align-items:center;gap:12px}
.hdr h1{font-size:17px;font-weight:600}
.hdr h1 a{color:#fff}
.hdr-right{display:flex;gap:10px;align-items:center}
.ctr{max-width:1100px;margin:0 auto;padding:24px 28px}
.card{background:var(--sf);border:1px solid var(--bd);border-radius:var(--r);padding:20px;margin-bottom:16px}
.card-t{font-size:12px;font-weight:600;color:var(--tx2);text-transform:uppercase;letter-spacing:1px;margin-bottom:14px}
.grid2{display:grid;grid-template-columns:1fr 1fr;gap:16px}
label{display:block;font-size:12px;font-weight:600;color:var(--tx2);margin:8px 0 4px}
input,select,textarea{width:100%;padding:7px 10px;border:1px solid var(--bd);border-radius:6px;font-size:14px;font-family:inherit;background:var(--sf)}
textarea{min-height:70px}
.btn{padding:8px 16px;font-size:13px;font-weight:600;border-radius:6px;border:1px solid var(--bd);background:var(--sf2);color:var(--tx);cursor:pointer}
.btn:disabled{opacity:.45;cursor:not-allowed}
.btn-p{background:var(--ac);border-color:var(--ac);color:#fff}
.btn-g{background:var(--gn);border-color:var(--gn);color:#fff}
.btn-sm{padding:4px 10px;font-size:11px}
.items{width:100%;border-collapse:collapse;font-size:13px}
.items th{text-align:left;padding:6px;font-size:10px;color:var(--tx2);text-transform:uppercase;border-bottom:1px solid var(--bd)}
.items td{padding:6px;vertical-align:middle}
.items td.num{text-align:right;font-family:ui-monospace,monospace;white-space:nowrap}
.totals{margin-left:auto;max-width:320px;font-size:14px}
.totals div{display:flex;justify-content:space-between;padding:4px 0}
.totals .grand{font-weight:700;font-size:16px;border-top:1px solid var(--bd);padding-top:8px}
.badge{padding:3px 9px;border-radius:16px;font-size:10px;font-weight:600;text-transform:uppercase;letter-spacing:.5px}
.b-pending{background:rgba(202,138,4,.12);color:var(--yl)}
.b-paid{background:rgba(22,163,74,.12);color:var(--gn)}
.b-overdue{background:rgba(220,38,38,.12);color:var(--rd)}
.err{color:var(--rd);font-size:13px;margin-top:8px}
.gate{max-width:380px;margin:12vh auto;text-align:center}
.home-cards{display:grid;grid-template-columns:1fr 1fr;gap:16px}
.home-cards .card{text-align:center;padding:32px}
.home-cards h2{font-size:20px;margin-bottom:8px}
.home-cards p{color:var(--tx2);font-size:13px;margin-bottom:16px}
.check{display:flex;gap:8px;align-items:center}
.check input{width:auto}
@media(max-width:800px){.grid2,.home-cards{grid-template-columns:1fr}}
"""

PAGE_TOP = """<!DOCTYPE html><html><head><meta charset="utf-8">
<meta name="viewport" content="width=device-width,initial-scale=1">
<title>{{ company.name }} | {{ page_title }}</title>
<style>""" + BASE_CSS + """</style></head><body>
<div class="hdr"><h1><a href="/">{{ company.name }}</a></h1>
<div class="hdr-right">
 <a href="/quote" class="btn btn-sm">Quote</a>
 <a href="/invoice" class="btn btn-sm">Invoice</a>
 <form method="post" action="/logout"><button class="btn btn-sm" type="submit">Logout</button></form>
</div></div>
<div class="ctr">
"""

PAGE_BOTTOM = """
</div></body></html>"""

GATE_HTML = """<!DOCTYPE html><html><head><meta charset="utf-8">
<meta name="viewport" content="width=device-width,initial-scale=1">
<title>Secure Access Required</title>
<style>""" + BASE_CSS + """</style></head><body>
<div class="gate card">
 <h2 style="margin-bottom:6px">Secure Access Required</h2>
 <p style="color:var(--tx2);font-size:13px;margin-bottom:14px">Please enter your access code to continue</p>
 <form method="post" action="/access">
  <input type="hidden" name="next" value="{{ next_url }}">
  <label for="access_code" style="text-align:left">Access Code</label>
  <input id="access_code" name="access_code" type="password" value="{{ gate.code_input }}"
         placeholder="Enter access code" autofocus>
  <div class="check" style="margin-top:6px">
   <input id="show-code" type="checkbox"
          onchange="document.getElementById('access_code').type = this.checked ? 'text' : 'password'">
   <label for="show-code" style="margin:0;font-weight:400">Show code</label>
  </div>
  {% if gate.error %}<p class="err">{{ gate.error }}</p>{% endif %}
  <button class="btn btn-p" type="submit" style="width:100%;margin-top:14px">Access Application</button>
 </form>
</div></body></html>"""

PAGE_HOME = """
<div style="text-align:center;margin:20px 0 32px">
 <h1 style="font-size:32px">{{ company.name }}</h1>
 <p style="color:var(--gn);font-style:italic;font-weight:600;margin:8px 0">{{ company.slogan }}</p>
 <p style="color:var(--tx2)">Quote &amp; Invoice Generator</p>
</div>
<div class="home-cards">
 <div class="card">
  <h2>Create Quote</h2>
  <p>Professional quotes with automatic calculations</p>
  <a href="/quote" class="btn btn-g">Create New Quote</a>
 </div>
 <div class="card">
  <h2>Create Invoice</h2>
  <p>Invoices with payment status tracking</p>
  <a href="/invoice" class="btn btn-p">Create New Invoice</a>
 </div>
</div>
"""

PAGE_EDITOR = """
<form method="post" id="editor">
<div style="display:flex;justify-content:space-between;align-items:center;margin-bottom:16px">
 <div><a href="/" class="btn btn-sm">&larr; Back to Home</a>
  <h1 style="display:inline-block;margin-left:12px;font-size:24px">Create {{ doc.title.title() }}</h1></div>
 <button class="btn {{ 'btn-p' if doc.doc_type == 'invoice' else 'btn-g' }}" type="submit"
         name="action" value="export" id="export-btn">Generate PDF</button>
</div>

<div class="grid2">
 <div class="card">
  <div class="card-t">{{ doc.title.title() }} Details</div>
  <div class="grid2">
   <div><label for="number">{{ doc.title.title() }} Number</label>
    <input id="number" name="number" value="{{ doc.number }}"></div>
   {% if doc.doc_type == 'invoice' %}
   <div><label for="status">Status <span class="badge b-{{ doc.status }}">{{ doc.status }}</span></label>
    <select id="status" name="status">
     {% for s in statuses %}<option value="{{ s }}" {{ 'selected' if s == doc.status }}>{{ s.title() }}</option>{% endfor %}
    </select></div>
   {% else %}
   <div><label for="date">Date</label><input id="date" name="date" type="date" value="{{ doc.date }}"></div>
   {% endif %}
  </div>
  <div class="grid2">
   {% if doc.doc_type == 'invoice' %}
   <div><label for="date">Invoice Date</label><input id="date" name="date" type="date" value="{{ doc.date }}"></div>
   {% endif %}
   <div><label for="{{ doc.secondary_date_field }}">{{ doc.secondary_date_label }}</label>
    <input id="{{ doc.secondary_date_field }}" name="{{ doc.secondary_date_field }}" type="date"
           value="{{ doc.secondary_date }}"></div>
  </div>
 </div>
 <div class="card">
  <div class="card-t">Client Information</div>
  <label for="client_name">Client Name</label><input id="client_name" name="client_name" value="{{ doc.client_name }}">
  <label for="client_email">Client Email</label><input id="client_email" name="client_email" type="email" value="{{ doc.client_email }}">
  <label for="client_address">Client Address</label><textarea id="client_address" name="client_address">{{ doc.client_address }}</textarea>
 </div>
</div>

<div class="card">
 <div style="display:flex;justify-content:space-between;align-items:center">
  <div class="card-t">Line Items</div>
  <button class="btn btn-sm" type="submit" name="action" value="add_item">+ Add Item</button>
 </div>
 <table class="items">
  <thead><tr><th style="width:50%">Description</th><th>Qty</th><th>Unit Price</th><th>Amount</th><th></th></tr></thead>
  <tbody>
  {% for item in doc.items %}
   <tr>
    <td><input type="hidden" name="items-{{ loop.index0 }}-id" value="{{ item.id }}">
        <input name="items-{{ loop.index0 }}-description" value="{{ item.description }}" placeholder="Service description"></td>
    <td><input name="items-{{ loop.index0 }}-quantity" type="number" min="0" step="1" value="{{ item.quantity }}"></td>
    <td><input name="items-{{ loop.index0 }}-unit_price" type="number" min="0" step="0.01" value="{{ '%.2f' % item.unit_price }}"></td>
    <td class="num">{{ money(item.amount) }}</td>
    <td><button class="btn btn-sm" type="submit" name="action" value="remove_item:{{ item.id }}"
                {{ 'disabled' if doc.items|length == 1 }}>&times;</button></td>
   </tr>
  {% endfor %}
  </tbody>
 </table>
</div>

<div class="grid2">
 <div class="card">
  <div class="card-t">Tax &amp; Notes</div>
  <div class="check"><input id="tax_enabled" name="tax_enabled" type="checkbox" {{ 'checked' if doc.tax_enabled }}>
   <label for="tax_enabled" style="margin:0">Apply tax</label></div>
  <div class="grid2">
   <div><label for="tax_label">Tax Label</label><input id="tax_label" name="tax_label" value="{{ doc.tax_label }}"></div>
   <div><label for="tax_rate">Tax Rate (%)</label><input id="tax_rate" name="tax_rate" type="number" min="0" step="0.01" value="{{ rate(doc.tax_rate) }}"></div>
  </div>
  <label for="notes">Notes</label><textarea id="notes" name="notes">{{ doc.notes }}</textarea>
 </div>
 <div class="card">
  <div class="card-t">Summary</div>
  <div class="totals">
   <div><span>Subtotal</span><span id="subtotal">{{ money(doc.subtotal) }}</span></div>
   {% if doc.tax_enabled %}<div><span>{{ doc.tax_label }} ({{ rate(doc.tax_rate) }}%)</span><span id="tax">{{ money(doc.tax) }}</span></div>{% endif %}
   <div class="grand"><span>Total</span><span id="total">{{ money(doc.total) }}</span></div>
  </div>
  <button class="btn" type="submit" name="action" value="update" style="margin-top:14px">Update Totals</button>
 </div>
</div>
</form>
<script>
document.getElementById('editor').addEventListener('submit', function(e){
 var btn = document.getElementById('export-btn');
 if(!e.submitter || e.submitter !== btn) return;
 // disable after the submitter's value is captured
 setTimeout(function(){ btn.disabled = true; btn.textContent = 'Generating...'; }, 0);
 setTimeout(function(){ btn.disabled = false; btn.textContent = 'Generate PDF'; }, 4000);
});
</script>
"""

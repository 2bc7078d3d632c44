import base64
import io
import logging
import time

from PIL import Image
from flask import Flask, request, jsonify, send_file

from config import load_settings
from dashboard import Dashboard
from render import DOWNLOAD_FILENAME, render_page, render_regions

logger = logging.getLogger(__name__)

app = Flask(__name__)

dashboard = Dashboard()


def data_uri_to_png(data_uri):
    """Decode a base64 data URI and re-encode the image as PNG bytes."""
    _header, b64 = data_uri.split(",", 1)
    raw_bytes = base64.b64decode(b64)
    img = Image.open(io.BytesIO(raw_bytes))
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


def json_body():
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        return None
    return data


def state_response(elapsed=None):
    state = dashboard.snapshot()
    result = {"state": state, "regions": render_regions(state)}
    if elapsed is not None:
        result["elapsed"] = elapsed
    return jsonify(result)


@app.route("/")
def index():
    return render_page(dashboard.snapshot())


@app.route("/api/state")
def get_state():
    return state_response()


@app.route("/api/session/start", methods=["POST"])
def start_session():
    data = json_body()
    if data is None:
        return jsonify({"error": "Expected a JSON object"}), 400

    location = data.get("location")
    if location is not None and not isinstance(location, str):
        return jsonify({"error": "Location must be a string"}), 400

    start = time.time()
    dashboard.start(location)
    return state_response(elapsed=round(time.time() - start, 1))


@app.route("/api/essence/refresh", methods=["POST"])
def refresh_essence():
    start = time.time()
    dashboard.refresh_essence()
    return state_response(elapsed=round(time.time() - start, 1))


@app.route("/api/image", methods=["POST"])
def create_image():
    data = json_body()
    if data is None:
        return jsonify({"error": "Expected a JSON object"}), 400

    prompt = data.get("prompt", "")
    if not isinstance(prompt, str) or not prompt.strip():
        return jsonify({"error": "Prompt cannot be empty"}), 400

    start = time.time()
    dashboard.generate_image(prompt)
    return state_response(elapsed=round(time.time() - start, 1))


@app.route("/api/image/download")
def download_image():
    image = dashboard.snapshot()["generated_image"]
    if not image:
        return jsonify({"error": "No image generated yet"}), 404

    try:
        png_bytes = data_uri_to_png(image)
    except (ValueError, OSError) as e:
        logger.exception("Could not decode generated image")
        return jsonify({"error": str(e)}), 502

    return send_file(
        io.BytesIO(png_bytes),
        mimetype="image/png",
        as_attachment=True,
        download_name=DOWNLOAD_FILENAME,
    )


@app.route("/api/tasks", methods=["POST"])
def add_task():
    data = json_body()
    if data is None:
        return jsonify({"error": "Expected a JSON object"}), 400

    text = data.get("text", "")
    if not isinstance(text, str):
        return jsonify({"error": "Task text must be a string"}), 400

    dashboard.add_task(text)
    return state_response()


@app.route("/api/tasks/<task_id>/toggle", methods=["POST"])
def toggle_task(task_id):
    if dashboard.toggle_task(task_id) is None:
        return jsonify({"error": f"Unknown task: {task_id}"}), 404
    return state_response()


@app.route("/api/tasks/<task_id>", methods=["DELETE"])
def delete_task(task_id):
    if not dashboard.delete_task(task_id):
        return jsonify({"error": f"Unknown task: {task_id}"}), 404
    return state_response()


def main():
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    settings = load_settings()
    if not settings.api_key:
        logger.warning("GEMINI_API_KEY is not set; the dashboard will show fallback content")
    app.run(debug=settings.debug, host=settings.host, port=settings.port, threaded=True)


if __name__ == "__main__":
    main()

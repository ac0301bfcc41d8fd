import azure.functions as func

from vibefeed_recommendation_service.blueprints import feed_bp

app = func.FunctionApp()

app.register_blueprint(feed_bp)
